from modinfo.effects import classify_effect
from modinfo.song import Module
from modinfo.types import PERIOD_TABLE, Channel, Instrument, Pattern, Row
from dataclasses import replace
from typing import BinaryIO
import io
import logging

__all__ = ['TruncatedInput', 'MODReader', 'load_from_stream', 'load_from_bytes', 'load_from_file']

logger = logging.getLogger(__name__)


class TruncatedInput(EOFError):
    """The module ended before all the bytes of a field or section could be read."""

    def __init__(self, what: str, expected: int, actual: int):
        super().__init__(f"Truncated module: expected {expected} bytes for {what}, got {actual}.")
        self.what = what
        self.expected = expected
        self.actual = actual


class MODReader:
    """
    Decodes a standard 4-channel, 31-instrument MOD file from a forward-only byte stream.

    The file is made of the following sections, read strictly in this order:
    title (20 bytes), instrument table (31 x 30 bytes), song length, restart byte,
    order list (128 bytes), signature (4 bytes), pattern data (1024 bytes per pattern),
    and finally the raw instrument payloads.
    """

    ROWS = Channel.N_ROWS
    CHANNELS = Pattern.N_CHANNELS
    SAMPLES = 31
    PATTERN_SIZE = ROWS * CHANNELS * 4

    TITLE_LEN = 20
    NAME_LEN = 22
    ORDER_LIST_LEN = 128

    KNOWN_SIGNATURES = ('M.K.', 'M!K!', 'FLT4', '4CHN')

    PERIOD_TABLE = PERIOD_TABLE

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def read_exact(self, n: int, what: str) -> bytes:
        """
        Reads exactly n bytes from the stream.

        :param n: The number of bytes to read.
        :param what: The name of the field being read, used in the error message.
        :return: The bytes read.
        """

        data = self.stream.read(n)
        if data is None:
            data = b''
        # some streams return short reads before the end, so keep reading until n bytes or EOF
        while len(data) < n:
            more = self.stream.read(n - len(data))
            if not more:
                raise TruncatedInput(what, n, len(data))
            data += more
        return bytes(data)

    @staticmethod
    def decode_text(raw: bytes) -> str:
        """Decodes a fixed-width text field, dropping the trailing NUL or space padding."""
        return raw.decode('utf-8', errors='replace').rstrip('\x00 ')

    @staticmethod
    def decode_finetune(raw: int) -> int:
        """
        Lower four bits are the finetune value, stored as a signed 4-bit number.
        The upper four bits are not used.
        """

        nibble = raw & 0x0F
        return nibble - 16 if nibble >= 8 else nibble

    '''
    -------------------------------------
    HEADER AND SONG STRUCTURE
    -------------------------------------
    '''

    def read_title(self) -> str:
        return MODReader.decode_text(self.read_exact(MODReader.TITLE_LEN, 'title'))

    def read_instruments(self) -> list[Instrument]:
        """
        Reads the 31 instrument descriptors. Payloads are left empty, they come after the patterns.
        All the 16-bit fields are big-endian word counts.

        :return: A list of 31 instruments without payload.
        """

        instruments = []

        for i in range(MODReader.SAMPLES):

            what = f'instrument {i + 1}'

            name = MODReader.decode_text(self.read_exact(MODReader.NAME_LEN, f'{what} name'))
            length = int.from_bytes(self.read_exact(2, f'{what} length'), byteorder='big', signed=False)
            finetune, volume = self.read_exact(2, f'{what} finetune and volume')
            repeat_point = int.from_bytes(self.read_exact(2, f'{what} repeat point'), byteorder='big', signed=False)
            repeat_len = int.from_bytes(self.read_exact(2, f'{what} repeat length'), byteorder='big', signed=False)

            # Volume range is 0x00-0x40 (or 0-64 decimal)
            if volume > 64:
                logger.warning("Instrument %d has volume %d, above the maximum of 64.", i + 1, volume)

            instruments.append(Instrument(
                name=name,
                length=length,
                finetune=MODReader.decode_finetune(finetune),
                volume=volume,
                repeat_point=repeat_point,
                repeat_len=repeat_len))

        return instruments

    def read_song_structure(self) -> tuple[int, int, tuple[int, ...]]:
        """
        Reads the song length, the restart byte and the full 128-entry order list.
        Entries beyond the song length are unused but still part of the file.

        :return: A tuple (song_length, restart, order_list).
        """

        song_length, restart = self.read_exact(2, 'song length and restart')
        if song_length > MODReader.ORDER_LIST_LEN:
            logger.warning("Song length %d exceeds the order list size of %d.", song_length, MODReader.ORDER_LIST_LEN)

        order_list = tuple(self.read_exact(MODReader.ORDER_LIST_LEN, 'order list'))

        return song_length, restart, order_list

    def read_signature(self) -> str:
        signature = self.read_exact(4, 'signature').decode('utf-8', errors='replace')
        if signature not in MODReader.KNOWN_SIGNATURES:
            logger.warning("Unrecognized module signature %r.", signature)
        return signature

    '''
    -------------------------------------
    PATTERNS
    -------------------------------------
    '''

    @staticmethod
    def get_instrument_from_cell(cell: bytes) -> int:
        """
        Returns the instrument number from a 4-byte cell.
        The low nibble of byte 0 gives the upper 4 bits, the high nibble of byte 2 the lower 4 bits.

        :param cell: A 4-byte cell.
        :return: The instrument number.
        """

        u4 = (cell[0] & 0x0F) << 4  # upper 4 bits of instrument number
        l4 = cell[2] & 0xF0  # lower 4 bits
        return u4 | (l4 >> 4)

    @staticmethod
    def get_pitch_from_cell(cell: bytes) -> int:
        """
        Returns the 12-bit period (pitch) from a 4-byte cell, 0 if no pitch is specified.
        """

        return ((cell[0] & 0x0F) << 8) | cell[1]

    @staticmethod
    def get_effect_from_cell(cell: bytes) -> tuple[int, int, int]:
        """
        Returns the effect code and its two argument nibbles from a 4-byte cell.
        Effects follow a hex format, e.g. E60 means (14, 6, 0).

        :param cell: A 4-byte cell.
        :return: A tuple (code, x, y).
        """

        return cell[2] & 0x0F, cell[3] >> 4, cell[3] & 0x0F

    @staticmethod
    def decode_cell(cell: bytes) -> Row:
        code, x, y = MODReader.get_effect_from_cell(cell)
        return Row(
            instrument_idx=MODReader.get_instrument_from_cell(cell),
            pitch=MODReader.get_pitch_from_cell(cell),
            effect=classify_effect(code, x, y),
            effect_code=code,
            x=x,
            y=y)

    @staticmethod
    def count_patterns(order_list: tuple[int, ...]) -> int:
        """
        The MOD standard does not store patterns beyond the maximum pattern number in the order list,
        so the number of stored patterns is that maximum plus one. All 128 entries are considered.
        """

        return max(order_list, default=0) + 1

    def read_pattern(self, p: int) -> Pattern:
        """
        Reads one pattern. Cells are stored row by row, each row holding one 4-byte cell per channel.

        :param p: The pattern index, used in error messages.
        :return: The decoded pattern.
        """

        data = self.read_exact(MODReader.PATTERN_SIZE, f'pattern {p}')

        rows_by_channel = [[] for _ in range(MODReader.CHANNELS)]

        for r in range(MODReader.ROWS):
            for c in range(MODReader.CHANNELS):

                # byte index
                idx = r * MODReader.CHANNELS * 4 + c * 4

                # a full 4-byte slot in the current channel, e.g. "C-5 11 F06"
                rows_by_channel[c].append(MODReader.decode_cell(data[idx:idx + 4]))

        return Pattern(tuple(Channel(tuple(rows)) for rows in rows_by_channel))

    def read_patterns(self, n_patterns: int) -> list[Pattern]:
        return [self.read_pattern(p) for p in range(n_patterns)]

    '''
    -------------------------------------
    SAMPLE DATA
    -------------------------------------
    '''

    def read_payloads(self, instruments: list[Instrument]) -> list[Instrument]:
        """
        Reads the raw payload of every instrument, in table order, and attaches it by index.
        All the waveforms are stored right after the pattern data.

        :param instruments: The 31 instrument descriptors read from the instrument table.
        :return: New instruments with their payloads filled in.
        """

        return [
            replace(inst, payload=self.read_exact(inst.byte_length, f'instrument {i + 1} sample data'))
            for i, inst in enumerate(instruments)
        ]

    def check_trailing_data(self):
        # peeking a single byte is enough to tell whether anything follows the sample data
        if self.stream.read(1):
            logger.warning("The module has unexpected data after the sample payloads.")

    '''
    -------------------------------------
    MODULE
    -------------------------------------
    '''

    def read_module(self) -> Module:
        """
        Decodes a whole module from the stream, which must be positioned at its start.
        Raises TruncatedInput if the stream ends early; no partial module is ever returned.

        :return: The decoded module.
        """

        title = self.read_title()
        instruments = self.read_instruments()
        song_length, restart, order_list = self.read_song_structure()
        signature = self.read_signature()

        n_patterns = MODReader.count_patterns(order_list)
        logger.debug("Reading %d patterns for '%s' (%s).", n_patterns, title, signature)
        patterns = self.read_patterns(n_patterns)

        instruments = self.read_payloads(instruments)
        self.check_trailing_data()

        return Module(
            title=title,
            instruments=tuple(instruments),
            song_length=song_length,
            restart=restart,
            order_list=order_list,
            signature=signature,
            patterns=tuple(patterns))


def load_from_stream(stream: BinaryIO) -> Module:
    return MODReader(stream).read_module()


def load_from_bytes(data: bytes) -> Module:
    return load_from_stream(io.BytesIO(data))


def load_from_file(fname: str, verbose: bool = True) -> Module:
    """
    Loads a module from a standard MOD file.

    :param fname: The path to the module file.
    :param verbose: False for silent loading.
    :return: The decoded module.
    """

    if verbose:
        print(f'Loading {fname}... ', end='', flush=True)

    with open(fname, 'rb') as mod_file:
        module = load_from_stream(mod_file)

    if verbose:
        print('done.')

    return module
