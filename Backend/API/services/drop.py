from dataclasses import asdict, dataclass
from typing import Literal

from services.constants import DROP_COLUMN_ADJUSTMENT, ROWS
from services.rng import RoundRNG

Direction = Literal["left", "right"]


@dataclass(frozen=True)
class PathStep:
    row: int
    column: int  # right moves so far, after this row
    direction: Direction
    peg_bias: float
    adjusted_bias: float
    random_value: float

    def to_dict(self) -> dict:
        return asdict(self)


def drop_adjustment(drop_column: int, rows: int = ROWS) -> float:
    return (drop_column - rows // 2) * DROP_COLUMN_ADJUSTMENT


def simulate_drop(rng: RoundRNG, peg_map: list[list[float]], drop_column: int) -> list[PathStep]:
    """Walk the ball down the peg map, one draw per row.

    Position counts rightward moves, so the final position is the bin.
    Draws continue the sequence left off by generate_peg_map.
    """
    rows = len(peg_map)
    adjustment = drop_adjustment(drop_column, rows)
    position = 0
    path = []
    for row in range(rows):
        peg_index = min(position, row)
        left_bias = peg_map[row][peg_index]
        adjusted_bias = max(0.0, min(1.0, left_bias + adjustment))

        r = rng.next()
        if r < adjusted_bias:
            direction = "left"
        else:
            direction = "right"
            position += 1

        path.append(PathStep(
            row=row,
            column=position,
            direction=direction,
            peg_bias=left_bias,
            adjusted_bias=adjusted_bias,
            random_value=r,
        ))
    return path
