"""Text helpers shared by the code generators."""


def respace(text: str) -> str:
    """Collapse runs of whitespace, honouring literal `\\n` escapes."""
    return " ".join(text.split()).replace(r"\n", "\n")


def docstring(text: str) -> str:
    """Render `text` as a triple-quoted Python docstring literal."""
    text = respace(text).replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    if text.endswith('"'):
        text = text[:-1] + '\\"'
    return f'"""{text}"""'


def hex_literal(n: int) -> str:
    """Turn `n` into a hex literal grouped in 16-bit chunks."""
    h4, h3, h2, h1 = (n >> 48) & 0xFFFF, (n >> 32) & 0xFFFF, (n >> 16) & 0xFFFF, n & 0xFFFF
    if h4:
        return f"0x{h4:04x}_{h3:04x}_{h2:04x}_{h1:04x}"
    if h3:
        return f"0x{h3:04x}_{h2:04x}_{h1:04x}"
    if h2:
        return f"0x{h2:04x}_{h1:04x}"
    if h1 & 0xFF00:
        return f"0x{h1:04x}"
    if h1:
        return f"0x{h1:02x}"
    return "0"
