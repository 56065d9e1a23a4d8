import struct

import pytest


def pack_instrument(name=b'', length=0, finetune=0, volume=0, repeat_point=0, repeat_len=0) -> bytes:
    return struct.pack(">22sH2B2H", name, length, finetune, volume, repeat_point, repeat_len)


def pack_cell(instrument=0, pitch=0, code=0, x=0, y=0) -> bytes:
    """
    Packs a cell using the layout the decoder reads. The low nibble of byte 0 holds both the
    instrument high nibble and the pitch high nibble, so keep one of them at 0.
    """
    b0 = ((instrument >> 4) & 0x0F) | ((pitch >> 8) & 0x0F)
    return bytes([b0, pitch & 0xFF, ((instrument & 0x0F) << 4) | code, (x << 4) | y])


def build_mod(title=b'', instruments=None, song_length=1, restart=0, order_list=None,
              signature=b'M.K.', patterns=None, payloads=None) -> bytes:
    """
    Builds a synthetic module. Instruments are given as keyword dicts for pack_instrument,
    patterns as 1024-byte blobs, payloads as raw bytes per instrument.
    """

    instruments = list(instruments or [])
    instruments += [{}] * (31 - len(instruments))

    order_list = list(order_list or [])
    order_list += [0] * (128 - len(order_list))

    if patterns is None:
        patterns = [bytes(1024) for _ in range(max(order_list) + 1)]

    data = struct.pack("20s", title)
    for inst in instruments:
        data += pack_instrument(**inst)
    data += struct.pack("2B", song_length, restart)
    data += bytes(order_list)
    data += signature
    for p in patterns:
        data += p
    for payload in payloads or []:
        data += payload
    return data


@pytest.fixture
def minimal_mod() -> bytes:
    return build_mod(title=b'minimal')
