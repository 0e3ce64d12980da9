#!/usr/bin/env python
# -*- coding: utf-8 -*-

import logging

import numpy as np

import pywhole.base as base
from pywhole.limits import BigWholeLimits

RESET_BIT, SET_BIT, FLIP_BIT = 'reset', 'set', 'flip'


class BigWhole:
    '''
    Arbitrary-length, non-negative whole numbers, stored as a growable numpy
    array of fixed-width unsigned words (least-significant word first). The
    value behaves both like an unsigned integer and like a bit set: bit i lives
    in word i // word_bits at offset i % word_bits, and every bit past the end
    of the buffer reads as zero.

    Bit-mutating operations grow the buffer as needed but never shrink it, so
    high-order all-zero words may stay allocated. Every query treats the buffer
    as if those words were trimmed off.
    '''

    word_dtype = np.uint32
    word_bits = 32

    def __init__(self, value=None):
        '''
        Initialize the value from one of these sources:
        :param value: None (zero), another BigWhole (deep copy), a non-negative
        integer (split into words), a boolean mask (mask[i] sets bit i) or a
        collection of set-bit indices such as a set, list or integer array.
        '''
        self._words = self._build_words(value)

    @classmethod
    def from_int(cls, v):
        return cls(int(v))

    @classmethod
    def from_bit_vector(cls, mask):
        return cls(np.asarray(mask, dtype=bool))

    @classmethod
    def from_bit_indices(cls, indices):
        return cls(np.fromiter(indices, dtype=np.int64))

    @classmethod
    def _build_words(cls, value):
        '''
        Make a brand new word buffer for a construction source, never sharing
        storage with the source.
        '''
        if value is None:
            return np.zeros(0, dtype=cls.word_dtype)
        if isinstance(value, BigWhole):
            if np.dtype(value.word_dtype) == np.dtype(cls.word_dtype):
                return value._words.copy()
            return base.bit_indices_to_words(value.to_bit_indices(), dtype=cls.word_dtype)
        if isinstance(value, (int, np.integer)):
            return base.int_to_words(value, dtype=cls.word_dtype)
        if isinstance(value, (set, frozenset)):
            return base.bit_indices_to_words(value, dtype=cls.word_dtype)
        arr = np.asarray(value)
        if arr.dtype == bool:
            return base.bit_vector_to_words(arr, dtype=cls.word_dtype)
        return base.bit_indices_to_words(arr.ravel(), dtype=cls.word_dtype)

    def __repr__(self):
        return f"{self.__class__.__name__.lower()}{self.to_bit_indices().tolist()}"

    '''
    Equality compares the set bits, so trailing zero words and the word width
    never matter. There is no ordering, and being mutable the value is not
    hashable.
    '''
    def __eq__(self, o):
        if not isinstance(o, BigWhole):
            return NotImplemented
        return np.array_equal(self.to_bit_indices(), o.to_bit_indices())

    __hash__ = None

    def __bool__(self):
        return self.any()

    def __copy__(self):
        return self.__class__(self)

    def __deepcopy__(self, memo):
        return self.__class__(self)

    def copy(self):
        return self.__class__(self)

    # Object-mutating operations

    def swap(self, other):
        '''
        Exchange buffers with another instance, without copying any words.
        Instances of different word widths cannot share a buffer, so each
        side is rebuilt in its own width before the exchange.
        '''
        if np.dtype(self.word_dtype) != np.dtype(other.word_dtype):
            mine, theirs = self._build_words(other), other._build_words(self)
            self._words, other._words = mine, theirs
            return
        self._words, other._words = other._words, self._words

    def assign(self, other):
        '''
        Replace the value with a copy of another BigWhole or with an integer.
        The new buffer is fully built before it is swapped in, so a failure
        part-way leaves this value untouched.
        '''
        assert isinstance(other, (BigWhole, int, np.integer)), f"Cannot assign from {type(other).__name__}"
        temp = self.__class__(other)
        logging.debug(f"Assigning {temp._words.size:,d} word(s) over {self._words.size:,d} word(s).")
        self.swap(temp)

    def reconfigure(self, source):
        '''
        Replace the value from a boolean mask or from a collection of set-bit
        indices, with the same build-then-swap guarantee as assign().
        '''
        assert not isinstance(source, (BigWhole, int, np.integer)), "Use assign() for whole-number and integer sources"
        temp = self.__class__(source)
        logging.debug(f"Reconfiguring to {temp._words.size:,d} word(s) over {self._words.size:,d} word(s).")
        self.swap(temp)

    # Value-accessing operations

    def to_uintmax(self, num_bits=64):
        '''
        Value as a fixed-width unsigned integer. Only the lowest num_bits bits
        survive; the rest are silently dropped, so callers who care about
        overflow should compare length() against num_bits first.
        :param num_bits: Width of the result, defaults to 64 like uintmax_t.
        '''
        temp = 0
        words = self._words[:base.words_for_bits(num_bits, self.word_bits)]
        for word in words[::-1]:
            temp = (temp << self.word_bits) | int(word)
        return temp & ((1 << num_bits) - 1)

    def to_bit_vector(self):
        '''
        Boolean numpy array of size length(), True wherever a bit is set.
        '''
        indices = self.to_bit_indices()
        temp = np.zeros(int(indices.max()) + 1 if indices.size else 0, dtype=bool)
        temp[indices] = True
        return temp

    def to_bit_indices(self):
        '''
        Ascending numpy array of the indices of every set bit.
        '''
        return base.words_to_bit_indices(self._words)

    # Bit-twiddling operations

    def reset(self, from_=None, to=None):
        '''
        Clear every bit when called without arguments, otherwise clear bit
        from_ or the inclusive range [from_, to]. Never grows the buffer.
        '''
        if from_ is None:
            self._words = np.zeros(0, dtype=self.word_dtype)
            return
        self._bit_change(from_, from_ if to is None else to, RESET_BIT)

    def set(self, from_, to=None):
        self._bit_change(from_, from_ if to is None else to, SET_BIT)

    def flip(self, from_, to=None):
        self._bit_change(from_, from_ if to is None else to, FLIP_BIT)

    def bit_assign(self, from_, to, value=None):
        '''
        Set or reset bits depending on a truth value. Called either as
        bit_assign(i, value) or as bit_assign(from_, to, value).
        '''
        if value is None:
            from_, to, value = from_, from_, to
        self._bit_change(from_, to, SET_BIT if value else RESET_BIT)

    def bits_assign(self, from_, to, values):
        '''
        Overwrite the inclusive bit range [from_, to] with the low bits of
        values, leaving every bit outside the range as it was. Bits of values
        that do not fit in the range are dropped.
        '''
        from_, to = self._check_range(from_, to)
        if not isinstance(values, BigWhole):
            values = self.__class__(values)

        t_ids = self.to_bit_indices()
        v_ids = values.to_bit_indices()

        pre_t_ids = t_ids[t_ids < from_]
        new_v_ids = v_ids[v_ids <= (to - from_)] + from_
        post_t_ids = t_ids[t_ids > to]
        self.reconfigure(np.concatenate((pre_t_ids, new_v_ids, post_t_ids)))

    # Bit-inspecting operations

    def length(self):
        '''
        Index of the highest set bit plus one, or 0 for the zero value.
        '''
        o = base.wlength(self._words)
        if o:
            return base.blength(self._words[o - 1]) + (o - 1) * self.word_bits
        return 0

    def count(self):
        return sum(base.count_set_bits_for_word(word) for word in self._words)

    def any(self):
        return bool(self._words.size) and bool(self._words.any())

    def none(self):
        return not self.any()

    def test(self, i):
        wi, wj = divmod(self._check_index(i), self.word_bits)
        if wi >= self._words.size:
            return False
        return bool((int(self._words[wi]) >> wj) & 1)

    def tests(self, from_, to):
        '''
        New value holding the bits of the inclusive range [from_, to], shifted
        down so that bit from_ becomes bit 0.
        '''
        from_, to = self._check_range(from_, to)
        ids = self.to_bit_indices()
        new_ids = ids[(ids >= from_) & (ids <= to)] - from_
        return self.__class__(new_ids)

    def reverse(self, cap=None):
        '''
        Mirror the bit pattern within the window [0, cap]: bit i moves to
        cap - i, and bits above cap are dropped. Without a cap the window is
        the value's own length, and zero reverses to zero.
        '''
        if cap is None:
            return self.reverse(self.length() - 1) if self.any() else self.copy()
        cap = self._check_index(cap)
        ids = self.to_bit_indices()
        return self.__class__(cap - ids[ids <= cap])

    # Self-operator mutators

    def not_self(self):
        '''
        Logical NOT, not a bitwise complement: a non-zero value becomes zero
        and zero becomes one.
        '''
        if self.any():
            self._words = np.zeros(0, dtype=self.word_dtype)
        else:
            self._words = np.ones(1, dtype=self.word_dtype)

    # Helpers

    @staticmethod
    def _check_index(i):
        i = int(i)
        if i < 0:
            raise ValueError(f"Bit index {i} is negative")
        return i

    @classmethod
    def _check_range(cls, from_, to):
        from_, to = cls._check_index(from_), cls._check_index(to)
        if from_ > to:
            from_, to = to, from_
        return from_, to

    def _grow(self, num_words):
        '''
        Replace the buffer with a zero-filled one of num_words words that starts
        with a copy of the current words. The old buffer is only dropped once
        the copy is complete.
        '''
        grown = np.zeros(num_words, dtype=self.word_dtype)
        grown[:self._words.size] = self._words
        logging.debug(f"Growing {self.__class__.__name__} buffer from {self._words.size:,d} to {num_words:,d} word(s).")
        self._words = grown

    def _change_word(self, wi, mask, op):
        words = self._words
        if op == FLIP_BIT:
            words[wi] ^= self.word_dtype(mask)
        elif op == SET_BIT:
            words[wi] |= self.word_dtype(mask)
        elif wi < words.size:
            # bits past the buffer are already clear
            words[wi] &= self.word_dtype(self._word_max() ^ mask)

    def _word_max(self):
        return (1 << self.word_bits) - 1

    def _bit_change(self, from_, to, op):
        from_, to = self._check_range(from_, to)
        fi, fj = divmod(from_, self.word_bits)
        ti, tj = divmod(to, self.word_bits)

        full = self._word_max()
        fm = full ^ ((1 << fj) - 1)  # bits at or above fj
        tm = (1 << (tj + 1)) - 1  # bits at or below tj

        if ti >= self._words.size and op != RESET_BIT:
            self._grow(ti + 1)

        if fi == ti:
            self._change_word(fi, fm & tm, op)
            return

        # lowest affected word
        self._change_word(fi, fm, op)

        # middle affected word(s), if any
        start, stop = fi + 1, min(self._words.size, ti)
        if stop > start:
            if op == FLIP_BIT:
                self._words[start:stop] ^= self.word_dtype(full)
            elif op == SET_BIT:
                self._words[start:stop] = self.word_dtype(full)
            else:
                self._words[start:stop] = 0

        # highest affected word
        self._change_word(ti, tm, op)


class BigWhole64(BigWhole):
    """
    Arbitrary-length whole numbers stored in 64-bit words.
    """

    word_dtype = np.uint64
    word_bits = 64


BigWhole.limits = BigWholeLimits(BigWhole)
BigWhole64.limits = BigWholeLimits(BigWhole64)


def swap(a, b):
    '''
    Exchange the values of two whole numbers in place.
    '''
    a.swap(b)


def logical_not(w):
    '''
    Logical NOT of a whole number as a new value, leaving w unchanged.
    '''
    temp = w.copy()
    temp.not_self()
    return temp
