#!/usr/bin/env python

# Copyright (C) 2026  The crazy-sequential authors
#
# Permission to use, copy, modify, and distribute this software for any
# purpose with or without fee is hereby granted, provided that the above
# copyright notice and this permission notice appear in all copies.
#
# THE SOFTWARE IS PROVIDED "AS IS" AND THE AUTHOR DISCLAIMS ALL WARRANTIES WITH
# REGARD TO THIS SOFTWARE INCLUDING ALL IMPLIED WARRANTIES OF MERCHANTABILITY
# AND FITNESS.  IN NO EVENT SHALL THE AUTHOR BE LIABLE FOR ANY SPECIAL, DIRECT,
# INDIRECT, OR CONSEQUENTIAL DAMAGES OR ANY DAMAGES WHATSOEVER RESULTING FROM
# LOSS OF USE, DATA OR PROFITS, WHETHER IN AN ACTION OF CONTRACT, NEGLIGENCE
# OR OTHER TORTIOUS ACTION, ARISING OUT OF OR IN CONNECTION WITH THE USE OR
# PERFORMANCE OF THIS SOFTWARE.

# Search for "crazy sequential representations" of integers
# (https://arxiv.org/abs/1302.1479): every way of writing a value using the
# digits of a fixed sequence, in order, combined with +, -, *, ^, / and
# digit concatenation.

from optparse import OptionParser
from collections import namedtuple
import itertools
import json
import logging
import math
from multiprocessing import Process, Queue, Pipe
from multiprocessing.connection import wait

logger = logging.getLogger(__name__)

DIGITS = (1, 2, 3, 4, 5)

# Results above this value (or below zero) are discarded, including
# intermediate ones.
LIMIT = 11111

# Number of operation assignments handed to a worker process at a time.
CHUNK_SIZE = 1024

# 'execute' returns None when the operation has no value for the operands
# (only division with a remainder does that).  'points' is used to rank
# expressions that reach the same value; subtraction and division are
# considered less elegant.
Operation = namedtuple('Operation', ['name', 'execute', 'symbol', 'points'])

def _divide(a, b):
    quotient, remainder = divmod(a, b)
    return quotient if remainder == 0 else None

ADDITION = Operation('addition', lambda a, b: a + b, '+', 0)
SUBTRACTION = Operation('subtraction', lambda a, b: a - b, '-', -1)
CONCATENATION = Operation('concatenation', lambda a, b: a * 10 + b, '', 0)
MULTIPLICATION = Operation('multiplication', lambda a, b: a * b, '*', 0)
POTENTIATION = Operation('potentiation', lambda a, b: a ** b, '^', 0)
DIVISION = Operation('division', _divide, '/', -1)

# The order matters: it defines the base-N digit of each operation in
# assignment_from_index().
OPERATIONS = (ADDITION, SUBTRACTION, CONCATENATION, MULTIPLICATION,
              POTENTIATION, DIVISION)

# Number of ways to assign an operation to each of the 'steps' gaps between
# digits.
def space_size(steps):
    return len(OPERATIONS) ** steps

# The naive size of the search space, i.e., also counting every order of
# applying the operations, including the ones we never try (concatenations
# not coming first).  For 9 digits (8 steps) this is 6^8 * 8! = 67,722,117,120.
def space_with_permutations(steps):
    return space_size(steps) * math.factorial(steps)

# Convert 'index' into an operation assignment: a list of (step, operation)
# in the left-to-right order of the steps.  The index is read as a number in
# base len(OPERATIONS), most significant digit first, padded to 'steps'
# digits.
def assignment_from_index(index, steps):
    base = len(OPERATIONS)
    ops = []
    for _ in range(steps):
        index, d = divmod(index, base)
        ops.append(OPERATIONS[d])
    ops.reverse()
    return list(enumerate(ops))

def index_from_assignment(assignment):
    index = 0
    for _, op in assignment:
        index = index * len(OPERATIONS) + OPERATIONS.index(op)
    return index

# Generate operation assignments for indices start..stop-1 (by default all of
# them).
def all_operation_combinations(steps, start=0, stop=None):
    if stop is None:
        stop = space_size(steps)
    for index in range(start, stop):
        yield assignment_from_index(index, steps)

# Generate every order in which the operations of 'assignment' can be
# applied.  Concatenations must apply before all other operations, and from
# left to right among themselves: (1||2)||3 = 123 is legal, 1||(2||3) = 1023
# is not.  So we only permute the other operations and always put the
# concatenations, untouched, in front of them.
#
# [(0, ||), (1, +), (2, ||), (3, -)] results in
# [(0, ||), (2, ||), (1, +), (3, -)] and [(0, ||), (2, ||), (3, -), (1, +)]
def order_permutations(assignment):
    concat_ops = [x for x in assignment if x[1] is CONCATENATION]
    other_ops = [x for x in assignment if x[1] is not CONCATENATION]
    for ops in itertools.permutations(other_ops):
        yield concat_ops + list(ops)

def score(order):
    return sum(op.points for _, op in order)

# A node of an expression tree.  Each of 'left' and 'right' is either an int
# (a digit) or another Node.
class Node:
    def __init__(self, op, left, right):
        self.op = op
        self.left = left
        self.right = right

    def __repr__(self):
        return 'Node(%s, %r, %r)' % (self.op.name, self.left, self.right)

# Build the expression tree for 'order', a list of (step, operation) in the
# order they are applied.  'state' starts as a copy of the digits; a
# combined node is stored at the position of its left operand and the
# position of the right operand becomes None.  The left operand of step i is
# thus the nearest non-None slot at or before i, while the right operand is
# always at i+1.
#
# [(0, ||), (2, -), (1, +), (3, +)] on 1 2 3 4 5:
#
#  1     2      3     4      5
#  12    None   3     4      5
#  12    None  3-4   None    5
#  12+(3-4) None None None   5
#  (12+(3-4))+5 ...
def to_tree(order, digits=DIGITS):
    state = list(digits)
    for i, op in order:
        a_i = i
        while state[a_i] is None:
            a_i -= 1
        state[a_i] = Node(op, state[a_i], state[i + 1])
        state[i + 1] = None
    return state[0]

# Accept 'result' only if it's an integer in [0, limit].  An integral float
# is converted back to int.
def _admissible(result, limit):
    if isinstance(result, float):
        if not result.is_integer():
            return None
        result = int(result)
    elif not isinstance(result, int):
        return None
    if result < 0 or result > limit:
        return None
    return result

# Calculate the value of the expression tree.  It returns None if the
# expression has no valid value: an illegal operation (like division with a
# remainder or by zero) or an out-of-range result anywhere in the tree.
def evaluate(tree, limit=LIMIT):
    if isinstance(tree, int):
        return _admissible(tree, limit)

    # digits are subject to the same range as any other value
    a = evaluate(tree.left, limit)
    b = evaluate(tree.right, limit)
    if a is None or b is None:
        return None
    # a^b >= 2^b > limit; don't bother calculating potentially huge numbers.
    if tree.op is POTENTIATION and a > 1 and b >= limit.bit_length():
        return None
    try:
        result = tree.op.execute(a, b)
    except (ArithmeticError, ValueError, TypeError):
        # e.g., division by zero
        return None
    return _admissible(result, limit)

# Convert the tree into a human readable string.  Subexpressions are always
# parenthesized except under concatenation, which can only be applied to
# digits or other concatenations.
def human_format(tree):
    if isinstance(tree, int):
        return str(tree)

    def child_str(child):
        if isinstance(child, int) or tree.op is CONCATENATION:
            return human_format(child)
        return '(' + human_format(child) + ')'

    return child_str(tree.left) + tree.op.symbol + child_str(tree.right)

def _check_config(digits, limit):
    digits = tuple(digits)
    if not digits:
        raise ValueError('digit sequence is empty')
    for d in digits:
        # concatenation appends a single decimal digit
        if not isinstance(d, int) or isinstance(d, bool) or not 1 <= d <= 9:
            raise ValueError('digits must be integers from 1 to 9: %r' % (d,))
    if limit < 0:
        raise ValueError('limit must not be negative: %r' % (limit,))
    return digits

# Append everything in 'partial' to 'results'.  Both map a value to a list of
# (expression, score).
def merge_results(results, partial):
    for value, representations in partial.items():
        results.setdefault(value, []).extend(representations)
    return results

# Explore operation assignments start..stop-1 and return the found
# representations as a dict: value => [(expression, score), ...].
# For a single assignment only the first order that reaches a given value is
# recorded, as other orders of the same operations mostly give equivalent
# expressions.
def search(digits=DIGITS, limit=LIMIT, start=0, stop=None):
    digits = _check_config(digits, limit)
    results = {}
    for assignment in all_operation_combinations(len(digits) - 1, start,
                                                 stop):
        found = {}
        for order in order_permutations(assignment):
            tree = to_tree(order, digits)
            value = evaluate(tree, limit)
            if value is not None and value not in found:
                found[value] = (human_format(tree), score(order))
        for value, representation in found.items():
            results.setdefault(value, []).append(representation)
    return results

# The loop for worker processes.  Each task is (chunk_index, start, stop);
# the results for the chunk are sent back with the chunk index so the master
# can merge them in the same order as a single-process search would.
def run_worker(conn, digits, limit, tasks):
    while True:
        task = tasks.get()
        if task is None:
            # received termination command.
            conn.send(None)
            break
        chunk_index, start, stop = task
        logger.debug('chunk %d: assignments %d..%d', chunk_index, start,
                     stop - 1)
        conn.send((chunk_index, search(digits, limit, start, stop)))

def _solve_parallel(digits, limit, num_workers, chunk_size):
    tasks = Queue()

    # create and start workers
    workers = []
    for _ in range(num_workers):
        parent_conn, child_conn = Pipe()
        worker = Process(target=run_worker,
                         args=(child_conn, digits, limit, tasks))
        worker.start()
        workers.append((worker, parent_conn))
    logger.info('started %d workers', num_workers)

    space = space_size(len(digits) - 1)
    for chunk_index, start in enumerate(range(0, space, chunk_size)):
        tasks.put((chunk_index, start, min(start + chunk_size, space)))

    # Tell workers all data have been passed.
    for _ in workers:
        tasks.put(None)

    # Collect the partial results until every worker has sent None.
    partials = {}
    conns = set(w[1] for w in workers)
    while conns:
        for c in wait(list(conns)):
            worker_data = c.recv()
            if worker_data is None:
                conns.remove(c)
                continue
            chunk_index, partial = worker_data
            partials[chunk_index] = partial

    for w in workers:
        w[0].join()
    logger.info('all workers completed')

    results = {}
    for chunk_index in sorted(partials):
        merge_results(results, partials[chunk_index])
    return results

# Top-level entry to solve the problem for the given digits.
def solve(digits=DIGITS, limit=LIMIT, num_workers=1, chunk_size=CHUNK_SIZE):
    digits = _check_config(digits, limit)
    steps = len(digits) - 1
    logger.info('digits %s, limit %d: %d operation assignments, '
                '%d including all orders', ' '.join(map(str, digits)), limit,
                space_size(steps), space_with_permutations(steps))
    if num_workers > 1:
        results = _solve_parallel(digits, limit, num_workers, chunk_size)
    else:
        results = search(digits, limit)
    logger.info('reached %d distinct values', len(results))
    return results

# Return the results as a list of (value, [(expression, score), ...]) sorted
# by value, with the representations of each value sorted by descending
# score (ties keep the order they were found in).
def sorted_results(results):
    return [(value, sorted(results[value], key=lambda r: -r[1]))
            for value in sorted(results)]

def print_results(results, as_json=False, value=None):
    report = sorted_results(results)
    if value is not None:
        report = [r for r in report if r[0] == value]
    if as_json:
        print(json.dumps(dict((str(v), [list(r) for r in reps])
                              for v, reps in report)))
        return
    for v, reps in report:
        print('%d:   %r' % (v, reps))

def main(argv=None):
    parser = OptionParser(usage='usage: %prog [options] [value]')
    parser.add_option("-m", "--max_num", dest='max_num', type='int',
                      action="store", default=len(DIGITS),
                      help="use digits 1 through max_num [default: %default]")
    parser.add_option("-d", "--digits", dest='digits',
                      action="store", default=None,
                      help="comma separated digits to use instead of "
                      "1..max_num, e.g., 9,8,7,6")
    parser.add_option("-l", "--limit", dest='limit', type='int',
                      action="store", default=LIMIT,
                      help="largest value to search for [default: %default]")
    parser.add_option("-w", "--workers", dest='num_workers', type='int',
                      action="store", default=1,
                      help="number of worker processes [default: %default]")
    parser.add_option("-j", "--json", dest='as_json',
                      action="store_true", default=False,
                      help="print the results in JSON")
    parser.add_option("-v", "--verbose", dest='verbose',
                      action="count", default=0,
                      help="log progress (repeat for more detail)")
    (options, args) = parser.parse_args(argv)

    logging.basicConfig(
        level={0: logging.WARNING, 1: logging.INFO}.get(options.verbose,
                                                          logging.DEBUG),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    if len(args) > 1:
        parser.error('too many arguments')
    try:
        value = int(args[0]) if args else None
        if options.digits is not None:
            digits = [int(d) for d in options.digits.split(',')]
        else:
            digits = range(1, options.max_num + 1)
        digits = _check_config(digits, options.limit)
    except ValueError as e:
        parser.error(str(e))
    if options.num_workers < 1:
        parser.error('number of workers must be positive')

    results = solve(digits, options.limit, options.num_workers)
    print_results(results, options.as_json, value)

if __name__ == '__main__':
    main()
