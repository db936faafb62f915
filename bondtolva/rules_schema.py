"""Validation schema for Bondtolva rules configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .deck import DECK_SIZE


class RuleSet(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    game_target: int = Field(12, gt=0, description="Cumulative score that ends the game.")
    hand_size: int = Field(6, gt=0, description="Cards dealt to each player.")
    packet_size: int = Field(3, gt=0, description="Cards per packet while dealing.")
    first_marriage_points: int = Field(2, ge=0, description="Points for the marriage that fixes trump.")
    later_marriage_points: int = Field(1, ge=0, description="Points for every marriage after trump is set.")
    last_trick_bonus: int = Field(1, ge=0, description="Bonus for the winner of the final trick.")
    matador_bonus: int = Field(1, ge=0, description="Bonus for the player who won more Kings and Tens.")
    card_point_bonus: int = Field(1, ge=0, description="Bonus for more card points when matadors tie.")
    allow_repeat_marriage: bool = Field(
        False,
        description="Offer a marriage in a suit the player has already declared this round.",
    )

    @model_validator(mode="after")
    def check_deal_shape(self) -> "RuleSet":
        if self.hand_size % self.packet_size != 0:
            raise ValueError("packet_size must divide hand_size.")
        stock_size = DECK_SIZE - 2 * self.hand_size
        if stock_size <= 0:
            raise ValueError("hand_size leaves no cards for the stock.")
        return self


DEFAULT_RULES = RuleSet()


def load_rules(path: Union[str, Path]) -> RuleSet:
    """Read a RuleSet from a JSON file; omitted fields keep their defaults."""
    return RuleSet.model_validate_json(Path(path).read_text(encoding="utf-8"))
