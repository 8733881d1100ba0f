import pytest

from scenario_codec.bitstream import Bitstream
from scenario_codec.errors import InvalidCharacterError
from scenario_codec.text_transform import ALPHABET, bits_to_text, text_to_bits


def test_alphabet_is_url_safe():
    assert len(ALPHABET) == 64
    assert len(set(ALPHABET)) == 64
    assert ALPHABET[0] == "A" and ALPHABET[26] == "a" and ALPHABET[52] == "0"
    assert ALPHABET[62:] == "-_"


def test_each_symbol_maps_to_its_index():
    bitstream = Bitstream()
    for index in range(64):
        bitstream.append(6, index)
    assert bits_to_text(bitstream) == ALPHABET


def test_partial_symbol_is_zero_padded():
    bitstream = Bitstream()
    bitstream.append(13, 0b1111111111111)
    assert bits_to_text(bitstream) == "__g"


def test_decode_yields_six_bits_per_character():
    bitstream = text_to_bits("__g")
    assert bitstream.bit_length == 18
    assert bitstream.read(13) == 0b1111111111111
    assert bitstream.read(5) == 0


@pytest.mark.parametrize("text", ["abc=", "ab+c", "a/b", "é", "a b"])
def test_characters_outside_alphabet_are_rejected(text):
    with pytest.raises(InvalidCharacterError):
        text_to_bits(text)
