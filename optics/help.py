"""
Plain-text help layout.

format_help_text() lays out usage and help screens as aligned columns. It is a
pure function: the parsing engine never consults it.
"""


def _align_left(text, width):
    text = text.strip()
    return text + " " * (width - len(text))


def _format_line(line, widths):
    if isinstance(line, list | tuple):
        return "  ".join(
            _align_left(str(cell), widths[index] if index < len(widths) else 0)
            for index, cell in enumerate(line)
        ).strip()
    return str(line).strip()


def format_help_text(indent_width, src, /):
    """
    Return `src` laid out as indented, column-aligned text.

    - Each entry of `src` is either a plain value (one line) or a row (a list or
      tuple of cells). Values and cells go through str() and are trimmed.
    - A column is as wide as its widest trimmed cell over every line; a plain
      line counts towards the first column.
    - Cells are left-aligned and separated by two spaces. Every line is prefixed
      with `indent_width` spaces, right-trimmed and terminated by a newline, so
      an empty line stays empty.

    >>> format_help_text(2, [["-v", "verbose"], ["--name=NAME", "set a name"]])
    '  -v           verbose\\n  --name=NAME  set a name\\n'
    """
    if not isinstance(indent_width, int) or isinstance(indent_width, bool):
        raise TypeError("format_help_text() 'indent_width' must be an integer")
    if not isinstance(src, list | tuple):
        raise TypeError("format_help_text() 'src' must be a list or a tuple")

    indent = " " * indent_width
    widths = []
    for line in src:
        cells = line if isinstance(line, list | tuple) else (line,)
        for index, cell in enumerate(cells):
            width = len(str(cell).strip())
            if index < len(widths):
                widths[index] = max(widths[index], width)
            else:
                widths.append(width)

    return "".join((indent + _format_line(line, widths)).rstrip() + "\n" for line in src)


__all__ = (
    "format_help_text",
)
