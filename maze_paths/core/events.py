import struct
from typing import Iterator, Tuple

# Event Types
EVT_SET_TYPE = 0x01
EVT_EXPAND = 0x02
EVT_RELAX = 0x03
EVT_PATH_ADD = 0x04

MAGIC = b"PATHLOG"

# Payload layout per event type (after the 1 byte type code)
PAYLOADS = {
    EVT_SET_TYPE: struct.Struct(">HHB"),
    EVT_EXPAND: struct.Struct(">HH"),
    EVT_RELAX: struct.Struct(">HH"),
    EVT_PATH_ADD: struct.Struct(">HH"),
}


class EventWriter:
    def __init__(self, filename: str):
        self.filename = filename
        self.file = open(filename, "wb")

    def write_header(self, size: int):
        # Header: Magic "PATHLOG" + Size (4b)
        self.file.write(MAGIC)
        self.file.write(struct.pack(">I", size))

    def _log(self, type_code: int, *values):
        # 'H' (unsigned short) coordinates: grids stay well under 65536 per side
        self.file.write(struct.pack(">B", type_code) + PAYLOADS[type_code].pack(*values))

    def log_set_type(self, x: int, y: int, cell_type: int):
        self._log(EVT_SET_TYPE, x, y, int(cell_type))

    def log_expand(self, x: int, y: int):
        self._log(EVT_EXPAND, x, y)

    def log_relax(self, x: int, y: int):
        self._log(EVT_RELAX, x, y)

    def log_path_add(self, x: int, y: int):
        self._log(EVT_PATH_ADD, x, y)

    def close(self):
        if self.file:
            self.file.close()
            self.file = None


class EventReader:
    def __init__(self, filename: str):
        self.filename = filename
        self.file = open(filename, "rb")
        self.size = 0

    def read_header(self) -> int:
        magic = self.file.read(len(MAGIC))
        if magic != MAGIC:
            raise ValueError("Invalid event log file")
        self.size, = struct.unpack(">I", self.file.read(4))
        return self.size

    def stream_events(self) -> Iterator[Tuple[int, Tuple]]:
        while True:
            type_byte = self.file.read(1)
            if not type_byte:
                break

            type_code = ord(type_byte)
            layout = PAYLOADS.get(type_code)
            if layout is None:
                raise ValueError(f"Unknown event type 0x{type_code:02x}")

            data = self.file.read(layout.size)
            if len(data) != layout.size:
                raise ValueError("Truncated event log")
            yield (type_code, layout.unpack(data))

    def close(self):
        if self.file:
            self.file.close()
            self.file = None
