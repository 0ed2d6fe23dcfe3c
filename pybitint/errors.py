#!/usr/bin/env python
# -*- coding: utf-8 -*-

'''
Precondition violations raised by the fixed-width integer classes. Overflow
and underflow are never errors, results wrap instead.
'''


class BitIntError(ValueError):
    pass


class WidthMismatchError(BitIntError):
    '''
    Operands, bit sequences or encodings whose width differs from the
    receiving type's.
    '''


class UnsupportedBaseError(BitIntError):
    '''
    String rendering or parsing in any base other than 2.
    '''


class BitIntZeroDivisionError(BitIntError, ZeroDivisionError):
    pass
