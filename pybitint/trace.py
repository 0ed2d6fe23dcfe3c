#!/usr/bin/env python
# -*- coding: utf-8 -*-

import logging

import pandas as pd

import pybitint.base


def calc_add_trace(a, b):
    '''
    Table of the ripple-carry chain that `a.add(b)` walks through, one row per
    bit position from the least significant bit up. Neither operand is
    mutated.

    Columns are the two input bits, the carry-in, and the sum and carry-out
    bits of the full adder at that position.
    '''
    b = a.coerce(b)
    rows = []
    carry = False
    for i in range(a.num_bits):
        carry_in = carry
        bit_sum, carry = pybitint.base.calc_full_add(a.bits[i], b.bits[i], carry_in)
        rows.append({
            'bit': i,
            'a': bool(a.bits[i]),
            'b': bool(b.bits[i]),
            'carry_in': carry_in,
            'sum': bit_sum,
            'carry_out': carry,
        })
    if carry:
        logging.debug(f"Carry out of bit {a.num_bits - 1:d} dropped adding {a!r} and {b!r}.")
    return pd.DataFrame(rows).set_index('bit')


def calc_mul_trace(a, b):
    '''
    Table of the shift-and-add loop that `a.mul(b)` runs, one row per
    iteration. The accumulator column holds the running product after the
    step, so the last row matches the product. Empty when `b` is zero.
    '''
    now, x = a.copy(), a.coerce(b).copy()
    acc = type(a)()
    rows = []
    step = 0
    while not x.empty():
        multiplier_bit = bool(x.bits[0])
        if multiplier_bit:
            acc.add(now)
        rows.append({
            'step': step,
            'multiplier_bit': multiplier_bit,
            'partial_product': now.to_unsigned(),
            'accumulator': acc.to_unsigned(),
        })
        logging.debug(f"Step {step:d}: multiplier bit {multiplier_bit:d}, partial product {now:d}, accumulator {acc:d}.")
        now.shl(1)
        x.shr(1)
        step += 1
    return pd.DataFrame(rows, columns=['step', 'multiplier_bit', 'partial_product', 'accumulator']).set_index('step')
