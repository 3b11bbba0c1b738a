import re


LATEX_SPECIALS = {
    '\\': r'\textbackslash{}',
    '&': r'\&',
    '%': r'\%',
    '$': r'\$',
    '#': r'\#',
    '_': r'\_',
    '{': r'\{',
    '}': r'\}',
    '~': r'\textasciitilde{}',
    '^': r'\textasciicircum{}',
}


def latex_escape(text: str) -> str:
    if text is None:
        return ''
    return ''.join(LATEX_SPECIALS.get(c, c) for c in str(text))


def latex_table(rows: "list[list[any]]") -> "list[str]":
    """
    Formats rows as longtable body lines; every row is followed by an \\hline.
    The cells must already be escaped.
    """

    lines = []
    for row in rows:
        lines.append(' & '.join(str(cell) for cell in row) + ' \\\\')
        lines.append('\\hline')
    return lines


def c_int_type(bit_width: int) -> str:
    if bit_width not in (32, 64):
        raise ValueError(f'Invalid register width: {bit_width} bit')
    return f'uint{bit_width}_t'


def c_int_suffix(bit_width: int) -> str:
    return 'U' if bit_width <= 32 else 'ULL'


def c_hex_literal(value: int, bit_width: int) -> str:
    """ Hex literal padded to the full register width, e.g. 0x0000000FU """
    if value < 0 or value >= (1 << bit_width):
        raise ValueError(f'Value 0x{value:X} does not fit into {bit_width} bit')
    digits = bit_width // 4
    return f'0x{value:0{digits}X}{c_int_suffix(bit_width)}'


def c_address_literal(text: str, bit_width: int) -> str:
    """ Copies the address text verbatim, appending the width suffix unless it already has one """
    text = text.strip()
    if re.search(r'[uUlL]$', text):
        return text
    return text + c_int_suffix(bit_width)


def graphviz_escape(text: str) -> str:
    return re.sub(r'([{}|<>"\\])', r'\\\1', str(text))


def c_comment_text(text: str) -> str:
    """ Keeps free text from closing a C block comment """
    return str(text).replace('*/', '* /')
