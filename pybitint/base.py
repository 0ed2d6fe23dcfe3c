#!/usr/bin/env python
# -*- coding: utf-8 -*-

import numpy as np

from pybitint.errors import UnsupportedBaseError, WidthMismatchError

'''
Stateless functions and constants that are used throughout the fixed-width
integer classes and the trace helpers.
'''

# Full adder as a lookup, indexed by (carry << 2) | (b << 1) | a.
# Low bit of each entry is the sum bit, high bit is the carry-out.
FULL_ADD_TABLE = (0, 1, 1, 2, 1, 2, 2, 3)

SUPPORTED_BASES = (2,)


def calc_full_add(a, b, carry):
    '''
    One position of a ripple-carry adder. Returns the (sum, carry-out) pair
    of bits for the two input bits and the carry-in.
    '''
    entry = FULL_ADD_TABLE[(int(carry) << 2) | (int(b) << 1) | int(a)]
    return bool(entry & 1), bool(entry & 2)


def calc_num_bytes(num_bits):
    return (int(num_bits) + 7) // 8


def calc_bits_from_int(num, num_bits):
    '''
    Little-endian boolean bit array of exactly `num_bits` entries for a
    non-negative integer. Higher bits of the integer are dropped, missing
    ones are zero.
    :param num: Non-negative integer value
    :param num_bits: Width of the resulting bit array
    '''
    num = int(num) & ((1 << num_bits) - 1)
    packed = np.frombuffer(num.to_bytes(calc_num_bytes(num_bits), 'little'), dtype=np.uint8)
    return np.unpackbits(packed, bitorder='little')[:num_bits].astype(bool)


def calc_int_from_bits(bits):
    '''
    Unsigned integer value of a little-endian bit array.
    '''
    return int.from_bytes(calc_bytes_from_bits(bits), 'little')


def calc_bytes_from_bits(bits):
    return np.packbits(np.asarray(bits, dtype=bool), bitorder='little').tobytes()


def calc_bits_from_bytes(data, num_bits):
    '''
    Little-endian boolean bit array from little-endian bytes. The byte
    string must be exactly as long as `num_bits` needs, and any padding bits
    in the last byte are ignored.
    '''
    data = bytes(data)
    if len(data) != calc_num_bytes(num_bits):
        raise WidthMismatchError(f"Expected {calc_num_bytes(num_bits):,d} bytes for {num_bits:,d} bits, got {len(data):,d}")
    packed = np.frombuffer(data, dtype=np.uint8)
    return np.unpackbits(packed, bitorder='little')[:num_bits].astype(bool)


def calc_signed_from_unsigned(num, num_bits):
    '''
    Two's-complement reinterpretation of an unsigned value of a given width.
    '''
    if num >> (num_bits - 1):
        return num - (1 << num_bits)
    return num


def check_base(base):
    if base not in SUPPORTED_BASES:
        raise UnsupportedBaseError(f"Base {base} is not supported, only base 2")


def calc_bit_string(bits, base=2):
    '''
    Render a little-endian bit array as '0'/'1' characters, most significant
    bit first.
    '''
    check_base(base)
    return ''.join('1' if bit else '0' for bit in bits[::-1])


def calc_bits_from_string(text, num_bits, base=2):
    '''
    Parse a string of exactly `num_bits` '0'/'1' characters, most significant
    bit first, into a little-endian bit array. Underscores are ignored.
    '''
    check_base(base)
    digits = text.replace('_', '')
    if len(digits) != num_bits:
        raise WidthMismatchError(f"Expected {num_bits:,d} digits, got {len(digits):,d} in '{text}'")
    if set(digits) - {'0', '1'}:
        raise ValueError(f"Invalid base-2 digits in '{text}'")
    return np.array([digit == '1' for digit in reversed(digits)], dtype=bool)
