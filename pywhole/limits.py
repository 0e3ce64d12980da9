#!/usr/bin/env python
# -*- coding: utf-8 -*-


class BigWholeLimits:
    '''
    Numeric-traits descriptor for an arbitrary-length whole-number type, the
    same questions one would ask of a fixed-width integer (is it signed, what
    is its smallest value, can it round, ...) answered for a type that has no
    fixed width. Each whole-number class carries one of these as its `limits`
    attribute.
    '''

    is_specialized = True

    digits = 0
    digits10 = 0
    radix = 2

    is_signed = False
    is_integer = True
    is_exact = True
    is_bounded = False
    is_modulo = False
    is_iec559 = False

    min_exponent = 0
    min_exponent10 = 0
    max_exponent = 0
    max_exponent10 = 0

    has_infinity = False
    has_quiet_nan = False
    has_signaling_nan = False
    has_denorm = 'denorm_absent'
    has_denorm_loss = False

    traps = False
    tinyness_before = False
    round_style = 'round_toward_zero'

    def __init__(self, whole_type):
        self.whole_type = whole_type

    def __repr__(self):
        return f"limits<{self.whole_type.__name__}>"

    def min(self):
        return self.whole_type()

    '''
    Exact integers never round, so both the epsilon and the rounding error are
    the zero value.
    '''
    def epsilon(self): return self.whole_type()
    def round_error(self): return self.whole_type()

    def max(self):
        raise NotImplementedError(f"{self.whole_type.__name__} is unbounded, it has no maximum value")

    def infinity(self):
        raise NotImplementedError(f"{self.whole_type.__name__} has no infinity")

    def quiet_nan(self):
        raise NotImplementedError(f"{self.whole_type.__name__} has no quiet NaN")

    def signaling_nan(self):
        raise NotImplementedError(f"{self.whole_type.__name__} has no signaling NaN")

    def denorm_min(self):
        raise NotImplementedError(f"{self.whole_type.__name__} has no denormalized values")
