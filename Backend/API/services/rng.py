from services.seeds import extract_prng_seed

MASK32 = 0xFFFF_FFFF
TWO_32 = float(0x1_0000_0000)


class XorShift32:
    """Marsaglia xorshift (13, 17, 5) over a 32-bit state. Period 2^32 - 1."""

    def __init__(self, seed: int):
        # all-zero state is a fixed point
        self.state = (seed & MASK32) or 1

    def next(self) -> float:
        x = self.state
        x ^= (x << 13) & MASK32
        x ^= x >> 17
        x ^= (x << 5) & MASK32
        self.state = x
        return x / TWO_32  # [0,1)


class RoundRNG:
    """One generator per round. Peg map draws first, then path draws."""

    def __init__(self, combined_seed: str):
        self.prng = XorShift32(extract_prng_seed(combined_seed))
        self.call_count = 0

    def next(self) -> float:
        self.call_count += 1
        return self.prng.next()

    def reset(self, combined_seed: str) -> None:
        """Rewind to the first draw; only for re-verification of a finished round."""
        self.prng = XorShift32(extract_prng_seed(combined_seed))
        self.call_count = 0
