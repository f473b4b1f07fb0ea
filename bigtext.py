# decimal text for BigInt. only uses public arithmetic: digits go in and come
# out nine at a time, since 10**9 is the largest power of ten that still fits
# a single signed word.

import logging

from bigint import BigInt

logger = logging.getLogger(__name__)

CHUNK_DIGITS = 9
CHUNK = 10 ** CHUNK_DIGITS
_powers_of_ten = [10 ** idx for idx in range(CHUNK_DIGITS)]


def _is_numeral(text):
    digits = text[1:] if text.startswith('-') else text
    # str.isdigit would also let through non-ascii digits
    return digits != '' and all('0' <= ch <= '9' for ch in digits)

def try_parse(text):
    '''Parses digits 0-9, optionally prepended with a '-'.

    Returns (value, True), or (BigInt(0), False) if the text is anything else.'''
    if not isinstance(text, str) or not _is_numeral(text):
        logger.debug('not a decimal integer: %r', text)
        return BigInt(0), False

    neg = text[0] == '-'
    ix = 1 if neg else 0
    value = BigInt(0)
    while len(text) - ix >= CHUNK_DIGITS:
        value = value * CHUNK + int(text[ix:ix+CHUNK_DIGITS])
        ix += CHUNK_DIGITS
    if ix < len(text):
        value = value * _powers_of_ten[len(text) - ix] + int(text[ix:])
    if neg:
        value = -value
    return value, True

def parse(text):
    value, ok = try_parse(text)
    if not ok:
        raise ValueError(f"only digits 0-9, optionally prepended with a '-', are allowed: {text!r}")
    return value

def to_string(value):
    if value.is_zero:
        return '0'
    groups = []
    rest = value.absolute_value()
    while not rest.is_zero:
        rest, group = rest.divide_modulo(CHUNK)
        assert group.limbs == 0
        group = str(int(group))
        # every group but the leading one is padded to its full width
        if not rest.is_zero:
            group = group.zfill(CHUNK_DIGITS)
        groups.append(group)
    if value.sign < 0:
        groups.append('-')
    return ''.join(reversed(groups))
