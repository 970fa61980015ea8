import logging
import numpy as np
from plate_reader.domain.models import OcrResult

logger = logging.getLogger(__name__)

DEFAULT_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ_"
PAD_CHAR = "_"


def validate_alphabet(alphabet: str) -> str:
    if not alphabet:
        raise ValueError("Recognizer alphabet must not be empty")
    if len(set(alphabet)) != len(alphabet):
        raise ValueError(f"Recognizer alphabet has duplicate symbols: {alphabet!r}")
    return alphabet


def decode_slots(
    scores: np.ndarray,
    alphabet: str = DEFAULT_ALPHABET,
    max_slots: int = 8,
    pad_char: str = PAD_CHAR,
) -> OcrResult:
    """
    Argmax decode of a fixed-slot recognizer output.

    scores is read row-major as max_slots x len(alphabet). Each slot keeps its
    highest-scoring symbol (first index wins on ties); padding symbols are
    dropped wherever they appear. A short buffer stops decoding at the last
    complete slot. All-padding output yields an empty text, not an error.
    """
    vocab_size = len(alphabet)
    flat = np.asarray(scores, dtype=np.float32).reshape(-1)

    slots = min(max_slots, flat.size // vocab_size)
    if slots < max_slots:
        logger.warning(
            "Recognizer output too short: %d values for %d slots of %d symbols, decoding %d slot(s)",
            flat.size, max_slots, vocab_size, slots
        )

    rows = flat[:slots * vocab_size].reshape(slots, vocab_size)
    # A strict '>' scan never selects NaN; np.argmax would
    rows = np.where(np.isnan(rows), -np.inf, rows)
    # np.argmax returns the first maximum, matching a strict '>' scan
    best = rows.argmax(axis=1)

    text = []
    confidence = []
    for slot, idx in enumerate(best):
        char = alphabet[idx]
        if char == pad_char:
            continue
        text.append(char)
        confidence.append(float(rows[slot, idx]))

    return OcrResult(text="".join(text), confidence=confidence)
