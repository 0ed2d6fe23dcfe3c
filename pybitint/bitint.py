#!/usr/bin/env python
# -*- coding: utf-8 -*-

import logging

import numpy as np

import pybitint.base
from pybitint.errors import BitIntZeroDivisionError, WidthMismatchError


class BitInt:
    '''
    Fixed-width integers stored as a vector of bits, with every arithmetic
    operation carried out one bit position at a time. Values explicitly under-
    or over-flow according to the number of bits of the type. Abstract class,
    use `bitint_type()` or one of the widths declared in this module.

    Bit 0 is the least significant bit. The value has no sign of its own, it
    is only interpreted as signed by `to_signed()`.
    '''

    num_bits = None

    def __init__(self, num=0):
        '''
        Initialize from a non-negative integer, truncated or zero-extended to
        the width of the class, or copy another instance of the same width.
        :param num: Integer value or a same-width instance. Defaults to zero.
        '''
        if self.num_bits is None:
            raise TypeError(f"{type(self).__name__} has no width, use bitint_type() to pick one")
        if isinstance(num, BitInt):
            self.check_width(num)
            self.bits = num.bits.copy()
        else:
            self.bits = pybitint.base.calc_bits_from_int(self.check_unsigned(num), self.num_bits)

    @staticmethod
    def is_int(num):
        return isinstance(num, (int, np.integer)) and not isinstance(num, (bool, np.bool_))

    @classmethod
    def check_unsigned(cls, num):
        if not cls.is_int(num):
            raise TypeError(f"Cannot build a {cls.num_bits:,d}-bit integer from {type(num).__name__}")
        if num < 0:
            raise ValueError(f"Value {num} is negative, use from_signed() for two's complement")
        return int(num)

    def check_width(self, x):
        if x.num_bits != self.num_bits:
            raise WidthMismatchError(f"Cannot combine {self.num_bits:,d}-bit and {x.num_bits:,d}-bit integers")

    def coerce(self, x):
        '''
        Same-width operand for a binary operation. Integers that fit are
        converted to this type, wider integers and other widths are rejected.
        '''
        if isinstance(x, BitInt):
            self.check_width(x)
            return x
        x = self.check_unsigned(x)
        if x >> self.num_bits:
            raise ValueError(f"Operand {x} does not fit in {self.num_bits:,d} bits")
        return type(self)(x)

    '''
    Construction from other representations.
    '''
    @classmethod
    def from_signed(cls, num):
        '''
        Two's-complement encoding of a possibly negative integer, wrapped to the
        width of the class.
        '''
        if not cls.is_int(num):
            raise TypeError(f"Cannot build a {cls.num_bits:,d}-bit integer from {type(num).__name__}")
        return cls(int(num) & ((1 << cls.num_bits) - 1))

    @classmethod
    def from_bits(cls, bits):
        '''
        Build from a sequence of exactly `num_bits` truthy/falsy values, least
        significant bit first.
        '''
        bits = np.asarray(list(bits), dtype=bool)
        if bits.shape != (cls.num_bits,):
            raise WidthMismatchError(f"Expected {cls.num_bits:,d} bits, got {bits.size:,d}")
        ret = cls()
        ret.bits[:] = bits
        return ret

    @classmethod
    def from_string(cls, text, base=2):
        ret = cls()
        ret.bits[:] = pybitint.base.calc_bits_from_string(text, cls.num_bits, base=base)
        return ret

    @classmethod
    def from_bytes(cls, data):
        ret = cls()
        ret.bits[:] = pybitint.base.calc_bits_from_bytes(data, cls.num_bits)
        return ret

    '''
    Copying and assignment.
    '''
    def copy(self):
        return type(self)(self)

    def assign(self, x):
        '''
        Overwrite this value in place from an integer or a same-width instance.
        Integers are truncated the same way the constructor truncates them.
        '''
        if isinstance(x, BitInt):
            self.check_width(x)
        self.bits[:] = type(self)(x).bits
        return self

    def swap(self, other):
        if not isinstance(other, BitInt):
            raise TypeError(f"Cannot swap a {self.num_bits:,d}-bit integer with {type(other).__name__}")
        self.check_width(other)
        self.bits, other.bits = other.bits, self.bits
        return self

    '''
    Bitwise primitives. None of these carry state between positions.
    '''
    def band(self, x):
        self.bits &= self.coerce(x).bits
        return self

    def bor(self, x):
        self.bits |= self.coerce(x).bits
        return self

    def bxor(self, x):
        self.bits ^= self.coerce(x).bits
        return self

    def bnot(self):
        np.logical_not(self.bits, out=self.bits)
        return self

    def shl(self, k):
        '''
        Logical shift towards the most significant bit, filling with zeros.
        '''
        k = self.check_shift(k)
        if k >= self.num_bits:
            self.bits[:] = False
        elif k:
            self.bits[k:] = self.bits[:-k].copy()
            self.bits[:k] = False
        return self

    def shr(self, k):
        '''
        Logical shift towards the least significant bit, filling with zeros.
        '''
        k = self.check_shift(k)
        if k >= self.num_bits:
            self.bits[:] = False
        elif k:
            self.bits[:-k] = self.bits[k:].copy()
            self.bits[-k:] = False
        return self

    def rol(self, k):
        self.bits[:] = np.roll(self.bits, self.check_shift(k) % self.num_bits)
        return self

    def ror(self, k):
        self.bits[:] = np.roll(self.bits, -(self.check_shift(k) % self.num_bits))
        return self

    @classmethod
    def check_shift(cls, k):
        if not cls.is_int(k):
            raise TypeError(f"Shift count must be an integer, got {type(k).__name__}")
        k = int(k)
        if k < 0:
            raise ValueError(f"Shift count {k} is negative")
        return k

    '''
    Bit-serial arithmetic. All of it wraps modulo 2 ** num_bits.
    '''
    def add(self, x):
        '''
        Ripple-carry addition, one full adder per bit position from the least
        significant bit up. The final carry-out is dropped.
        '''
        x = self.coerce(x)
        carry = False
        for i in range(self.num_bits):
            self.bits[i], carry = pybitint.base.calc_full_add(self.bits[i], x.bits[i], carry)
        return self

    def sub(self, x):
        '''
        Add the two's complement of the operand, ~x + 1. The operand itself is
        left untouched.
        '''
        negated = self.coerce(x).copy().neg()
        return self.add(negated)

    def neg(self):
        return self.bnot().inc()

    def inc(self):
        # stop once a bit flips 0 -> 1, the carry is absorbed there
        for i in range(self.num_bits):
            self.bits[i] = not self.bits[i]
            if self.bits[i]:
                break
        return self

    def dec(self):
        # stop once a bit flips 1 -> 0, the borrow is absorbed there
        for i in range(self.num_bits):
            self.bits[i] = not self.bits[i]
            if not self.bits[i]:
                break
        return self

    def mul(self, x):
        '''
        Shift-and-add multiplication. Returns a new value, bits of the product
        beyond the width are lost.
        '''
        now, x = self.copy(), self.coerce(x).copy()
        ret = type(self)()
        while not x.empty():
            if x.bits[0]:
                ret.add(now)
            now.shl(1)
            x.shr(1)
        return ret

    def divmod(self, x):
        '''
        Unsigned restoring division, returning new (quotient, remainder) values.
        The bit shifted out of the running remainder takes part in the compare,
        so divisors with the top bit set still work.
        '''
        x = self.coerce(x)
        if x.empty():
            logging.debug(f"Rejecting division of {self!r} by zero.")
            raise BitIntZeroDivisionError(f"Division of a {self.num_bits:,d}-bit integer by zero")
        quo, rem = type(self)(), type(self)()
        for i in reversed(range(self.num_bits)):
            out = rem.bits[-1]
            rem.shl(1)
            rem.bits[0] = self.bits[i]
            if out or rem.geq(x):
                rem.sub(x)
                quo.bits[i] = True
        return quo, rem

    def div(self, x):
        return self.divmod(x)[0]

    def mod(self, x):
        return self.divmod(x)[1]

    '''
    Unsigned comparisons, scanning from the most significant bit down. The
    first differing position decides.
    '''
    def eq(self, x):
        return bool(np.array_equal(self.bits, self.coerce(x).bits))

    def gre(self, x):
        x = self.coerce(x)
        for i in reversed(range(self.num_bits)):
            if self.bits[i] != x.bits[i]:
                return bool(self.bits[i])
        return False

    def les(self, x):
        x = self.coerce(x)
        for i in reversed(range(self.num_bits)):
            if self.bits[i] != x.bits[i]:
                return bool(x.bits[i])
        return False

    def geq(self, x): return not self.les(x)
    def leq(self, x): return not self.gre(x)

    def empty(self):
        return not self.bits.any()

    '''
    Conversions.
    '''
    def to_string(self, base=2):
        return pybitint.base.calc_bit_string(self.bits, base=base)

    def to_unsigned(self):
        return pybitint.base.calc_int_from_bits(self.bits)

    def to_signed(self):
        return pybitint.base.calc_signed_from_unsigned(self.to_unsigned(), self.num_bits)

    def to_bytes(self):
        return pybitint.base.calc_bytes_from_bits(self.bits)

    def __int__(self):
        return self.to_unsigned()

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"bitint{self.num_bits}(0b{self.to_string()})"

    def __format__(self, *fmt_args):
        '''
        Just use the underlying Python int()'s formatting of the unsigned value.
        '''
        return self.to_unsigned().__format__(*fmt_args)

    def __eq__(self, o):
        if isinstance(o, BitInt):
            return self.eq(o)
        if self.is_int(o):
            # ints that do not fit are never equal, eq() rejects them
            return self.to_unsigned() == o
        return NotImplemented

    # mutable, so unhashable
    __hash__ = None


used_types = {}
def bitint_type(num_bits):
    '''
    The class of fixed-width integers with `num_bits` bits, created on first
    use. The same class is returned for the same width every time.
    '''
    if isinstance(num_bits, bool) or not isinstance(num_bits, int) or num_bits <= 0:
        raise ValueError(f"Width must be a positive integer, got {num_bits!r}")
    try:
        return used_types[num_bits]
    except KeyError:
        logging.debug(f"Defining {num_bits:,d}-bit integer type.")
        cls = type(f"BitInt{num_bits}", (BitInt,), {
            'num_bits': num_bits,
            '__doc__': f"Fixed-width {num_bits:,d}-bit integer.",
        })
        used_types[num_bits] = cls
        return cls


class BitInt8(BitInt):
    """
    Class for a common 8-bit integer type, a byte.
    """
    num_bits = 8


class BitInt16(BitInt):
    num_bits = 16


class BitInt32(BitInt):
    num_bits = 32


class BitInt64(BitInt):
    num_bits = 64


class BitInt128(BitInt):
    """
    Class for a common 128-bit integer type.
    """
    num_bits = 128


class BitInt256(BitInt):
    """
    Class for a common 256-bit integer type, e.g. an EVM word.
    """
    num_bits = 256


used_types.update({cls.num_bits: cls for cls in (BitInt8, BitInt16, BitInt32, BitInt64, BitInt128, BitInt256)})
