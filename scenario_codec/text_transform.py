#  Copyright 2025 $author, All rights reserved.
from .bitstream import Bitstream
from .errors import InvalidCharacterError

# URL safe base64 alphabet, each character carries 6 bits. No '=' padding is used.
ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
SYMBOL_BITS = 6
_symbol_indices = {symbol: index for index, symbol in enumerate(ALPHABET)}

def bits_to_text(bitstream: Bitstream) -> str:
    """
    Convert all bits written to bitstream into text, zero-padding the last symbol.
    The source stream is left untouched.
    :param bitstream: The stream to convert
    :return: The encoded text

    >>> stream = Bitstream()
    >>> stream.append(2, 1)
    >>> bits_to_text(stream)
    'Q'
    >>> stream.append(10, 0x3FF)
    >>> bits_to_text(stream)
    'f_'
    >>> bits_to_text(Bitstream())
    ''
    """
    reader = Bitstream()
    reader.from_array(bitstream.to_array(), bitstream.bit_length)
    reader.append(-reader.bit_length % SYMBOL_BITS, 0)
    symbols = []
    while reader.has_more():
        symbols.append(ALPHABET[reader.read(SYMBOL_BITS)])
    return "".join(symbols)

def text_to_bits(text: str) -> Bitstream:
    """
    Convert text back into a bitstream positioned for reading, 6 bits per character.
    Padding bits from encoding are part of the result, readers stop after their last field.
    :param text: The encoded text
    :return: A bitstream containing len(text) * 6 bits

    >>> stream = text_to_bits("Q")
    >>> stream.bit_length, stream.read(2), stream.read(4)
    (6, 1, 0)
    >>> text_to_bits("a=b")  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
    ...
    scenario_codec.errors.InvalidCharacterError: Invalid character '=' at position 1
    """
    bitstream = Bitstream()
    for position, symbol in enumerate(text):
        index = _symbol_indices.get(symbol, None)
        if index is None:
            raise InvalidCharacterError(f"Invalid character {symbol!r} at position {position}")
        bitstream.append(SYMBOL_BITS, index)
    return bitstream
