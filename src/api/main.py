"""
3D三目並べ FastAPI サーバ
ゲームエンジンを操作するためのローカル用エンドポイントを提供
"""

import logging
import os
import random
import uuid
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from ..engine import (
    ActionContext, Card, Game, Player, Position,
    DEFAULT_PIECE_CAP, DEFAULT_TURN_LIMIT
)

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# 環境変数で既定値を上書きできる
PIECE_CAP = int(os.getenv("TTT3D_PIECE_CAP", str(DEFAULT_PIECE_CAP)))
TURN_LIMIT = int(os.getenv("TTT3D_TURN_LIMIT", str(DEFAULT_TURN_LIMIT)))
HOST = os.getenv("TTT3D_HOST", "127.0.0.1")
PORT = int(os.getenv("TTT3D_PORT", "8001"))

app = FastAPI(
    title="3D Tic-Tac-Toe API",
    description="3D三目並べ（駒の寿命・凍結・強化捕獲・パワーカード付き）のバックエンドAPI",
    version="1.0.0"
)

cors_origins = os.getenv("CORS_ORIGINS", "*").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class GameSession:
    """1つのゲームとその進行中のカード提示を保持するクラス"""

    def __init__(self, game_id: str, game: Game):
        self.game_id = game_id
        self.game = game
        self.pending_offer: List[Card] = []
        # 提示を行ったラウンド（同じラウンドでは引き直せない）
        self.offer_round: Optional[int] = None

    def find_player(self, name: str) -> Player:
        for player in self.game.get_players():
            if player.name == name:
                return player
        raise HTTPException(status_code=400, detail=f"プレイヤーが見つかりません: {name}")

    def to_dict(self) -> dict:
        """ゲーム状態を辞書形式に変換"""
        state = self.game.to_dict()
        state["game_id"] = self.game_id
        state["current_player"] = self.game.current_player().name
        state["pending_offer"] = [card.name for card in self.pending_offer]
        return state


# ゲームの状態を保持する辞書
games: Dict[str, GameSession] = {}


# Pydanticモデル（リクエスト/レスポンス用）

class NewGameRequest(BaseModel):
    player_names: List[str] = Field(default_factory=lambda: ["Alice", "Bob"], min_length=1)
    piece_cap: Optional[int] = Field(default=None, ge=1)
    turn_limit: Optional[int] = Field(default=None, ge=1)
    seed: Optional[int] = None


class NewGameResponse(BaseModel):
    game_id: str
    message: str
    game_state: dict


class PlaceRequest(BaseModel):
    player: str
    x: int
    y: int
    z: int


class CaptureRequest(BaseModel):
    player: str
    from_x: int
    from_y: int
    from_z: int
    to_x: int
    to_y: int
    to_z: int


class UseCardRequest(BaseModel):
    player: str
    card: str  # EMPOWER, LAYER_SHIFT_UP, LAYER_SHIFT_DOWN, TIME_REWIND, FREEZE
    layer: int = Field(default=0, ge=0, le=2)
    x: Optional[int] = None
    y: Optional[int] = None
    z: Optional[int] = None


class ActionResponse(BaseModel):
    success: bool
    message: str
    game_state: dict
    score_increased: Optional[bool] = None


class OfferResponse(BaseModel):
    cards: List[str]
    display_names: List[str]
    game_state: dict


def _get_session(game_id: str) -> GameSession:
    if game_id not in games:
        raise HTTPException(status_code=404, detail="ゲームが見つかりません")
    return games[game_id]


def _get_active_session(game_id: str) -> GameSession:
    session = _get_session(game_id)
    if session.game.is_game_over():
        raise HTTPException(status_code=400, detail="ゲームは既に終了しています")
    return session


# エンドポイント

@app.get("/api")
async def root():
    """APIルート"""
    return {
        "message": "3D Tic-Tac-Toe API へようこそ",
        "version": "1.0.0",
        "endpoints": [
            "/new_game",
            "/get_game/{game_id}",
            "/place/{game_id}",
            "/capture/{game_id}",
            "/offer_cards/{game_id}",
            "/use_card/{game_id}",
            "/advance_round/{game_id}",
            "/delete_game/{game_id}",
        ]
    }


@app.post("/new_game", response_model=NewGameResponse)
async def new_game(request: Optional[NewGameRequest] = None):
    """新しいゲームを開始する"""
    request = request or NewGameRequest()
    if len(set(request.player_names)) != len(request.player_names):
        raise HTTPException(status_code=400, detail="プレイヤー名が重複しています")

    game = Game(
        [Player(name) for name in request.player_names],
        piece_cap=request.piece_cap or PIECE_CAP,
        turn_limit=request.turn_limit or TURN_LIMIT,
        rng=random.Random(request.seed),
    )
    game_id = str(uuid.uuid4())
    session = GameSession(game_id, game)
    games[game_id] = session
    logger.info("new game %s players=%s", game_id, request.player_names)

    return NewGameResponse(
        game_id=game_id,
        message="新しいゲームを開始しました",
        game_state=session.to_dict()
    )


@app.get("/get_game/{game_id}")
async def get_game(game_id: str):
    """ゲームの状態を取得"""
    return _get_session(game_id).to_dict()


@app.post("/place/{game_id}", response_model=ActionResponse)
async def place(game_id: str, request: PlaceRequest):
    """駒を置く"""
    session = _get_active_session(game_id)
    player = session.find_player(request.player)
    pos = Position(request.x, request.y, request.z)

    if not session.game.place_piece(player, pos):
        logger.info("%s: rejected placement by %s at %s", game_id, player.name, pos)
        return ActionResponse(
            success=False,
            message="そのマスには置けません（使用中・凍結中・盤外）",
            game_state=session.to_dict()
        )

    return ActionResponse(
        success=True,
        message="駒を置きました",
        game_state=session.to_dict()
    )


@app.post("/capture/{game_id}", response_model=ActionResponse)
async def capture(game_id: str, request: CaptureRequest):
    """強化された駒で隣接する敵の駒を取る"""
    session = _get_active_session(game_id)
    player = session.find_player(request.player)
    board = session.game.get_board()

    origin = Position(request.from_x, request.from_y, request.from_z)
    target = Position(request.to_x, request.to_y, request.to_z)
    piece = board.get_piece(origin) if board.in_bounds(origin) else None

    if not session.game.empowered_capture(player, piece, target):
        logger.info("%s: rejected capture by %s %s -> %s", game_id, player.name, origin, target)
        return ActionResponse(
            success=False,
            message="その捕獲はできません",
            game_state=session.to_dict()
        )

    return ActionResponse(
        success=True,
        message="駒を取りました",
        game_state=session.to_dict()
    )


@app.post("/offer_cards/{game_id}", response_model=OfferResponse)
async def offer_cards(game_id: str):
    """このラウンドのカードを2枚提示する"""
    session = _get_active_session(game_id)
    if not session.game.should_offer_card():
        raise HTTPException(status_code=400, detail="このラウンドではカードは提示されません")

    current_round = session.game.get_current_round()
    if session.offer_round != current_round:
        session.pending_offer = session.game.offer_cards()
        session.offer_round = current_round
    elif not session.pending_offer:
        raise HTTPException(status_code=400, detail="このラウンドのカードは使用済みです")

    return OfferResponse(
        cards=[card.name for card in session.pending_offer],
        display_names=[card.display_name for card in session.pending_offer],
        game_state=session.to_dict()
    )


@app.post("/use_card/{game_id}", response_model=ActionResponse)
async def use_card(game_id: str, request: UseCardRequest):
    """提示されたカードを1枚使う"""
    session = _get_active_session(game_id)
    player = session.find_player(request.player)
    board = session.game.get_board()

    try:
        card = Card.from_name(request.card)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"無効なパラメータ: {str(e)}")

    if card not in session.pending_offer:
        raise HTTPException(status_code=400, detail="そのカードは提示されていません")

    pos = None
    if request.x is not None and request.y is not None and request.z is not None:
        pos = Position(request.x, request.y, request.z)

    ctx = ActionContext(layer=request.layer)
    if card in (Card.EMPOWER, Card.TIME_REWIND):
        piece = board.get_piece(pos) if pos is not None and board.in_bounds(pos) else None
        if piece is None or piece.owner is not player:
            raise HTTPException(status_code=400, detail="自分の駒を指定してください")
        ctx.piece = piece
    elif card == Card.FREEZE:
        if pos is None:
            raise HTTPException(status_code=400, detail="凍結するマスを指定してください")
        ctx.pos = pos

    session.pending_offer = []
    score_increased = session.game.use_card(card, player, ctx)
    logger.info("%s: %s used %s", game_id, player.name, card.display_name)

    return ActionResponse(
        success=True,
        message=f"{card.display_name} を使いました",
        game_state=session.to_dict(),
        score_increased=score_increased
    )


@app.post("/advance_round/{game_id}")
async def advance_round(game_id: str):
    """ラウンドを進める"""
    session = _get_active_session(game_id)
    session.pending_offer = []
    session.game.advance_round()

    return {
        "message": f"ラウンド {session.game.get_current_round()} に進みました",
        "game_over": session.game.is_game_over(),
        "game_state": session.to_dict()
    }


@app.delete("/delete_game/{game_id}")
async def delete_game(game_id: str):
    """ゲームを削除"""
    _get_session(game_id)
    del games[game_id]
    logger.info("deleted game %s", game_id)
    return {"message": "ゲームを削除しました"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=HOST,
        port=PORT
    )
