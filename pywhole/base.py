#!/usr/bin/env python
# -*- coding: utf-8 -*-

import numpy as np

'''
Stateless functions over word buffers, used by the whole-number classes. A
word buffer is a 1-D numpy array of unsigned words, least-significant word
first.
'''

def word_bits_of(dtype):
    '''
    Number of bits in one word of the given unsigned numpy dtype.
    '''
    return np.dtype(dtype).itemsize * 8


def words_for_bits(bits, word_bits=32):
    '''
    Smallest number of words that can hold a certain number of bits.
    '''
    return (int(bits) // word_bits) + int(0 != (int(bits) % word_bits))


def wlength(words):
    '''
    Number of words in use, i.e. the buffer size once high-order all-zero
    words are trimmed off.
    '''
    i = words.size
    while i and not words[i - 1]:
        i -= 1
    return i


def blength(word):
    '''
    Number of bits in use within a single word, i.e. one past the index of its
    highest set bit.
    '''
    return int(word).bit_length()


def count_set_bits_for_word(word):
    return bin(int(word)).count('1')


def int_to_words(v, dtype=np.uint32):
    '''
    Split a non-negative Python integer into words, low chunk first. Stops once
    no non-zero chunk remains, so zero yields an empty buffer.
    '''
    v = int(v)
    if v < 0:
        raise ValueError(f"Value {v} is negative, whole numbers are unsigned")
    word_bits = word_bits_of(dtype)
    mask = (1 << word_bits) - 1  # 0xFFF... or 0b111...
    chunks = []
    while v > 0:
        chunks.append(v & mask)
        v >>= word_bits
    return np.array(chunks, dtype=dtype)


def bit_vector_to_words(mask, dtype=np.uint32):
    '''
    Pack a boolean mask (mask[i] means bit i is set) into words, trimming any
    trailing all-zero words.
    '''
    bits = np.asarray(mask, dtype=bool).ravel()
    if not bits.size:
        return np.zeros(0, dtype=dtype)
    word_dtype = np.dtype(dtype)
    num_words = words_for_bits(bits.size, word_bits_of(dtype))
    packed = np.packbits(bits, bitorder='little')
    raw = np.zeros(num_words * word_dtype.itemsize, dtype=np.uint8)
    raw[:packed.size] = packed
    words = raw.view(word_dtype.newbyteorder('<')).astype(word_dtype)
    return words[:wlength(words)].copy()


def bit_indices_to_words(indices, dtype=np.uint32):
    '''
    Build a word buffer from a collection of set-bit indices. Order and
    duplicates do not matter; an empty collection yields an empty buffer.
    '''
    ids = np.fromiter(indices, dtype=np.int64)
    if not ids.size:
        return np.zeros(0, dtype=dtype)
    if ids.min() < 0:
        raise ValueError(f"Bit index {ids.min()} is negative")
    mask = np.zeros(int(ids.max()) + 1, dtype=bool)
    mask[ids] = True
    return bit_vector_to_words(mask, dtype=dtype)


def words_to_bit_indices(words):
    '''
    Ascending indices of the set bits across a word buffer.
    '''
    if not words.size:
        return np.zeros(0, dtype=np.intp)
    little = words.astype(words.dtype.newbyteorder('<'))
    bits = np.unpackbits(little.view(np.uint8), bitorder='little')
    return np.flatnonzero(bits)
