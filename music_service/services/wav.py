from __future__ import annotations
import struct
from dataclasses import dataclass
from typing import Union

import numpy as np

from music_service.services.synth import to_pcm_bytes

HEADER_SIZE = 44
PCM_FORMAT = 1
# RIFF size, WAVE, fmt chunk, data chunk header
_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")


@dataclass
class WavHeader:
    file_size: int
    audio_format: int
    channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int
    data_size: int


def encode_wav(
    pcm: Union[bytes, np.ndarray],
    sample_rate: int,
    channels: int = 1,
    bits_per_sample: int = 16,
) -> bytes:
    """Wrap raw little-endian PCM in a canonical 44-byte-header WAV container."""
    data = to_pcm_bytes(pcm) if isinstance(pcm, np.ndarray) else bytes(pcm)
    byte_rate = sample_rate * channels * bits_per_sample // 8
    block_align = channels * bits_per_sample // 8
    header = _HEADER.pack(
        b"RIFF", 36 + len(data), b"WAVE",
        b"fmt ", 16, PCM_FORMAT, channels, sample_rate, byte_rate, block_align, bits_per_sample,
        b"data", len(data),
    )
    return header + data


def read_wav_header(blob: bytes) -> WavHeader:
    if len(blob) < HEADER_SIZE:
        raise ValueError(f"WAV blob too short: {len(blob)} bytes")
    (riff, file_size, wave, fmt, fmt_size, audio_format, channels, sample_rate,
     byte_rate, block_align, bits, data_tag, data_size) = _HEADER.unpack_from(blob)
    if (riff, wave, fmt, data_tag) != (b"RIFF", b"WAVE", b"fmt ", b"data") or fmt_size != 16:
        raise ValueError("not a canonical PCM WAV header")
    return WavHeader(file_size, audio_format, channels, sample_rate, byte_rate,
                     block_align, bits, data_size)
