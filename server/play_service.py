"""REST service for playing Bondtolva between two seated players."""

from __future__ import annotations

import logging
import uuid
from dataclasses import asdict
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from bondtolva.rules_schema import RuleSet
from bondtolva.service import GameService
from bondtolva.state import InvalidMove, PreconditionViolation

logger = logging.getLogger(__name__)


class StartRequest(BaseModel):
    players: List[str] = Field(..., min_length=2, max_length=2)
    seed: Optional[int] = None
    rules: Optional[RuleSet] = None


class CardPayload(BaseModel):
    rank: str
    suit: str


class MoveRequest(BaseModel):
    type: str
    card: CardPayload
    player: str


games: Dict[str, GameService] = {}


app = FastAPI(title="Bondtolva Play Service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def ensure_game(game_id: str) -> GameService:
    game = games.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="Game not found")
    return game


def ensure_seated(game: GameService, player: str) -> None:
    if player not in game.state.players:
        raise HTTPException(status_code=404, detail=f"Player {player!r} is not seated")


@app.post("/games")
def start_game(request: StartRequest) -> Dict[str, object]:
    try:
        game = GameService(request.players, seed=request.seed, rules=request.rules)
    except PreconditionViolation as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    game_id = uuid.uuid4().hex
    games[game_id] = game
    logger.info("Started game %s", game_id)
    return {
        "game_id": game_id,
        "state": asdict(game.get_view(game.state.current_player)),
    }


@app.get("/games/{game_id}")
def get_game(game_id: str, player: Optional[str] = None) -> Dict[str, object]:
    game = ensure_game(game_id)
    perspective = player or game.state.current_player
    ensure_seated(game, perspective)
    return {"state": asdict(game.get_view(perspective))}


@app.post("/games/{game_id}/deal")
def deal_game(game_id: str) -> Dict[str, object]:
    game = ensure_game(game_id)
    try:
        view = game.deal()
    except PreconditionViolation as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return {"state": asdict(view)}


@app.post("/games/{game_id}/moves")
def submit_move(game_id: str, request: MoveRequest) -> Dict[str, object]:
    game = ensure_game(game_id)
    ensure_seated(game, request.player)
    try:
        view = game.play(request.model_dump())
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except InvalidMove as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PreconditionViolation as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return {"state": asdict(view)}


@app.post("/games/{game_id}/next-round")
def next_round(game_id: str) -> Dict[str, object]:
    game = ensure_game(game_id)
    try:
        game.start_next_round()
        view = game.deal()
    except PreconditionViolation as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return {"state": asdict(view)}
