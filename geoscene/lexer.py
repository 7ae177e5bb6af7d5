import re
from typing import List, Tuple

Token = Tuple[str, str, int, int]  # (type, value, line, col)

SYMBOLS = {
    '(': 'LPAREN',
    ')': 'RPAREN',
    ',': 'COMMA',
    '-': 'DASH',
}

_word_re = re.compile(r'\w+')


def tokenize_line(s: str, line_no: int) -> List[Token]:
    tokens: List[Token] = []
    i = 0
    n = len(s)
    while i < n:
        ch = s[i]
        col = i + 1
        if ch == '#':
            break
        if ch.isspace():
            i += 1
            continue
        m = _word_re.match(s, i)
        if m:
            val = m.group(0)
            kind = 'NUMBER' if val.isdecimal() else 'ID'
            tokens.append((kind, val, line_no, col))
            i = m.end()
            continue
        if ch in SYMBOLS:
            tokens.append((SYMBOLS[ch], ch, line_no, col))
            i += 1
            continue
        tokens.append(('OTHER', ch, line_no, col))
        i += 1
    return tokens
