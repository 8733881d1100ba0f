#  Copyright 2023-2025 $author, All rights reserved.
#
#  For licensing terms, Please find the licensing terms in the closest
#  LICENSE.txt in this repository file going up the directory tree.
#

from array import array
from typing import Optional

from .errors import EndOfDataError

class Bitstream(object):
    """
    MSB-first bit buffer, fields are appended in write order and read back in the same order.
    Full bytes live in buffer, the partially filled byte in current_byte.
    """
    def __init__(self):
        self.buffer: list[int] = []
        self.read_position = 0
        self.write_position = 0
        self.current_byte = 0
    @property
    def bit_length(self) -> int:
        return len(self.buffer) * 8 + self.write_position
    def append(self, count: int, value: int):
        """
        Append the lowest count bits of value, higher bits are dropped.
        """
        buffer = self.buffer
        current_byte = self.current_byte
        write_position = self.write_position
        bit = count - 1
        for _ in range(count):
            current_byte = (current_byte << 1) | ((value >> (bit)) & 1)
            bit -= 1
            write_position += 1
            if write_position == 8:
                buffer.append(current_byte)
                current_byte = 0
                write_position = 0
        self.write_position = write_position
        self.current_byte = current_byte
        self.buffer = buffer
    def read(self, count: int) -> int:
        position = self.read_position
        if position + count > self.bit_length:
            raise EndOfDataError(f"Unexpected end of data, {count} bits requested at bit {position} of {self.bit_length}")
        value = 0
        buffer = self.buffer
        # The partial byte is kept right-aligned, shift it up so bit indices match full bytes.
        tail = self.current_byte << (8 - self.write_position)
        for _ in range(count):
            index = position // 8
            byte = buffer[index] if index < len(buffer) else tail
            value = (value << 1) | ((byte >> (7 - (position & 7))) & 1)
            position += 1
        self.read_position = position
        return value
    def has_more(self) -> bool:
        return self.read_position < self.bit_length
    def to_array(self) -> array:
        data = array('B', self.buffer)
        if self.write_position > 0:
            data.append(self.current_byte << (8 - self.write_position))
        return data
    def from_array(self, data: array, bit_length: Optional[int] = None):
        """
        Load data for reading, bit_length cuts off padding bits of the last byte.
        """
        size = len(data) * 8 if bit_length is None else bit_length
        full_bytes, remainder = divmod(size, 8)
        self.buffer = list(data[:full_bytes])
        self.read_position = 0
        self.write_position = remainder
        self.current_byte = (data[full_bytes] >> (8 - remainder)) if remainder else 0
