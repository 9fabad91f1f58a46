"""
Room Manager.

Creates, fills and runs two-player rooms. Every mutation is a
read-change-write against the room store, done under the room's lock and
written with the version it was read at. A version mismatch surfaces as
StoreConflictError; nothing here retries.

Lock order is room then user: starting a game spends lives (user locks)
while the room lock is held, never the other way round. Spending is the
life check; a start that is refused or fails to persist refunds every
life it took.
"""

from typing import Callable, Optional
import asyncio
import logging
import random
import uuid

from modules.lives.interfaces import ILivesService
from modules.lives.models import PlayPermission
from modules.notifications.service import NotificationService
from modules.users.interfaces import IUserProfileStore, IUserStatsService
from modules.users.models import GameResult
from modules.words.interfaces import IBoardGenerator, IWordScorer
from modules.words.lexicon import normalize_word
from modules.words.models import WordValidation
from shared.clock import Clock, utc_now
from shared.exceptions import StoreConflictError, StoreError
from shared.locks import KeyedLock
from shared.scheduler import DeadlineScheduler
from shared.store import ChangeCallback, IDocumentStore

from .exceptions import (
    PlayerNotInRoomError,
    RoomClockRunningError,
    RoomNotActiveError,
    RoomNotFoundError,
)
from .models import (
    DEFAULT_TARGET_SCORE,
    DEFAULT_TIME_LIMIT,
    MAX_PLAYERS,
    ROOM_CODE_ALPHABET,
    ROOM_CODE_LENGTH,
    GameMode,
    GameRoom,
    JoinOutcome,
    JoinResult,
    Player,
    RoomStatus,
)

logger = logging.getLogger(__name__)

CODE_ATTEMPTS = 5


def generate_room_code(rng: random.Random) -> str:
    return "".join(rng.choice(ROOM_CODE_ALPHABET) for _ in range(ROOM_CODE_LENGTH))


def room_clock_label(room_id: str) -> str:
    return f"room-clock:{room_id}"


def decide_timeout(room: GameRoom) -> tuple[Optional[str], bool]:
    """
    Winner and draw flag for a room whose time ran out.

    The single highest score wins; an exact tie at the top is a draw.
    """
    if not room.players:
        return None, False
    best = max(player.score for player in room.players)
    leaders = [player.user_id for player in room.players if player.score == best]
    if len(leaders) == 1:
        return leaders[0], False
    return None, True


class RoomService:
    """
    Room Manager implementation.

    Args:
        store: Room documents
        scorer: Word validation and points
        board_generator: Boards for new rooms
        profiles: Optional profile store for display name snapshots
        lives: Optional life pool; each player spends a life when a game starts
        stats: Optional stats sink fed when a room finishes
        timers: Optional scheduler for the timed-mode clock
        notifications: Optional notifications for game invites
    """

    def __init__(
        self,
        store: IDocumentStore[GameRoom],
        scorer: IWordScorer,
        board_generator: IBoardGenerator,
        profiles: Optional[IUserProfileStore] = None,
        lives: Optional[ILivesService] = None,
        stats: Optional[IUserStatsService] = None,
        timers: Optional[DeadlineScheduler] = None,
        notifications: Optional[NotificationService] = None,
        clock: Clock = utc_now,
        rng: Optional[random.Random] = None,
        default_target_score: int = DEFAULT_TARGET_SCORE,
        default_time_limit: int = DEFAULT_TIME_LIMIT,
    ):
        self._store = store
        self._scorer = scorer
        self._boards = board_generator
        self._profiles = profiles
        self._lives = lives
        self._stats = stats
        self._timers = timers
        self._notifications = notifications
        self._clock = clock
        self._rng = rng or random.Random()
        self._default_target_score = default_target_score
        self._default_time_limit = default_time_limit
        self._locks = KeyedLock()
        self._match_lock = asyncio.Lock()

    # =========================================================================
    # Lobby
    # =========================================================================

    async def create_room(
        self,
        host_id: str,
        mode: GameMode = GameMode.POINTS,
        max_points: Optional[int] = None,
        time_limit: Optional[int] = None,
    ) -> GameRoom:
        host = await self._player_snapshot(host_id)
        room = GameRoom(
            id=str(uuid.uuid4()),
            code=await self._unused_code(),
            mode=mode,
            max_points=max_points or self._default_target_score,
            time_limit=time_limit or self._default_time_limit,
            players=[host],
            letters=self._boards.generate(),
            created_at=self._clock(),
        )
        created = await self._store.create(room)
        logger.info(f"Room {created.id} ({created.mode.value}) created by {host_id}, code {created.code}")
        return created

    async def join_room(self, code: str, user_id: str) -> JoinResult:
        code = code.strip().upper()
        rooms = await self._store.query(where={"code": code})
        if not rooms:
            return JoinResult(outcome=JoinOutcome.NOT_FOUND)

        # Prefer a room the user is already in, then the newest waiting one.
        mine = [room for room in rooms if room.has_player(user_id)]
        waiting = [room for room in rooms if room.status == RoomStatus.WAITING]
        target = (mine or waiting or rooms)[-1]
        return await self._join(target.id, user_id)

    async def find_or_create_match(self, user_id: str) -> GameRoom:
        """
        First-match pairing.

        Scans waiting rooms in creation order and joins the first one holding
        exactly one other player. Scans are serialized so two seekers cannot
        both miss each other and open separate rooms.
        """
        async with self._match_lock:
            candidates = await self._store.query(
                predicate=lambda room: len(room.players) == 1 and room.players[0].user_id != user_id,
                where={"status": RoomStatus.WAITING},
            )
            for candidate in candidates:
                result = await self._join(candidate.id, user_id)
                if result.outcome == JoinOutcome.JOINED and result.room is not None:
                    logger.info(f"Matched {user_id} into room {candidate.id}")
                    return result.room

            return await self.create_room(user_id, GameMode.POINTS, self._default_target_score)

    async def get_room(self, room_id: str) -> GameRoom:
        room = await self._store.get(room_id)
        if room is None:
            raise RoomNotFoundError(room_id)
        return room

    def subscribe(self, room_id: str, on_change: ChangeCallback) -> Callable[[], None]:
        return self._store.subscribe(room_id, on_change)

    async def invite_player(self, room_id: str, host_id: str, invitee_id: str) -> bool:
        """
        Send a game invite for a waiting room.

        Returns:
            True if the invite was scheduled
        """
        room = await self.get_room(room_id)
        host = room.get_player(host_id)
        if host is None:
            raise PlayerNotInRoomError(room_id, host_id)
        if room.status != RoomStatus.WAITING:
            raise RoomNotActiveError(room_id, room.status.value, RoomStatus.WAITING.value)
        if self._notifications is None:
            return False
        return await self._notifications.send_game_invite(
            invitee_id,
            host.display_name or "Bir oyuncu",
            room_id,
        )

    # =========================================================================
    # Play
    # =========================================================================

    async def set_ready(self, room_id: str, user_id: str, ready: bool = True) -> GameRoom:
        """
        Flip a player's ready flag.

        With two players both ready the room starts: every player spends a
        life and a timed room arms its clock. A player who can no longer play
        is put back to not-ready and the room keeps waiting.
        """
        async with self._locks.hold(room_id):
            room = await self.get_room(room_id)
            if not room.has_player(user_id):
                raise PlayerNotInRoomError(room_id, user_id)
            if room.status == RoomStatus.PLAYING:
                return room
            if room.status != RoomStatus.WAITING:
                raise RoomNotActiveError(room_id, room.status.value, RoomStatus.WAITING.value)

            players = [
                player.model_copy(update={"is_ready": ready}) if player.user_id == user_id else player
                for player in room.players
            ]
            changes: dict = {"players": players}
            spent: dict[str, PlayPermission] = {}

            if len(players) == MAX_PLAYERS and all(player.is_ready for player in players):
                spent, blocked = await self._spend_lives(players)
                if blocked:
                    logger.info(f"Room {room_id} cannot start, no lives: {blocked}")
                    await self._refund_lives(spent)
                    spent = {}
                    changes["players"] = [
                        player.model_copy(update={"is_ready": False}) if player.user_id in blocked else player
                        for player in players
                    ]
                else:
                    changes["status"] = RoomStatus.PLAYING
                    changes["started_at"] = self._clock()

            try:
                updated = await self._store.update(room_id, changes, expected_version=room.version)
            except (StoreError, StoreConflictError):
                await self._refund_lives(spent)
                raise

        if updated.status == RoomStatus.PLAYING:
            logger.info(f"Room {room_id} started ({updated.mode.value})")
            self._arm_clock(updated)
        return updated

    async def update_current_word(self, room_id: str, user_id: str, word: str) -> GameRoom:
        async with self._locks.hold(room_id):
            room = await self.get_room(room_id)
            if not room.has_player(user_id):
                raise PlayerNotInRoomError(room_id, user_id)
            if room.status == RoomStatus.FINISHED:
                raise RoomNotActiveError(room_id, room.status.value, RoomStatus.PLAYING.value)

            players = [
                player.model_copy(update={"current_word": normalize_word(word)})
                if player.user_id == user_id
                else player
                for player in room.players
            ]
            return await self._store.update(room_id, {"players": players}, expected_version=room.version)

    async def submit_word(self, room_id: str, user_id: str, raw_word: str) -> WordValidation:
        """
        Score a word and apply it to the player.

        A word the player already scored in this room is reported with its
        true validity but 0 points. In points mode the submission that takes
        a player to the target finishes the room with them as winner.
        """
        validation = self._scorer.score(raw_word)
        finished: Optional[GameRoom] = None

        async with self._locks.hold(room_id):
            room = await self.get_room(room_id)
            player = room.get_player(user_id)
            if player is None:
                raise PlayerNotInRoomError(room_id, user_id)
            if room.status != RoomStatus.PLAYING:
                raise RoomNotActiveError(room_id, room.status.value, RoomStatus.PLAYING.value)

            if validation.word in player.words_submitted:
                return validation.model_copy(update={"points": 0, "already_submitted": True})
            if validation.points == 0:
                return validation

            scored = player.model_copy(
                update={
                    "score": player.score + validation.points,
                    "words_submitted": player.words_submitted + [validation.word],
                    "current_word": "",
                }
            )
            changes: dict = {
                "players": [scored if p.user_id == user_id else p for p in room.players],
            }
            if room.mode == GameMode.POINTS and scored.score >= room.max_points:
                changes["status"] = RoomStatus.FINISHED
                changes["winner"] = user_id
                changes["finished_at"] = self._clock()

            updated = await self._store.update(room_id, changes, expected_version=room.version)
            logger.debug(f"Room {room_id}: {user_id} scored {validation.word} (+{validation.points})")
            if updated.status == RoomStatus.FINISHED:
                finished = updated

        if finished is not None:
            logger.info(f"Room {room_id} finished, winner {user_id} with {scored.score}")
            await self._on_finished(finished)
        return validation

    async def end_by_timeout(self, room_id: str, only_if_expired: bool = False) -> GameRoom:
        """
        Finish a playing room because its time ran out.

        Already finished rooms are returned unchanged, so a late timer and a
        client report can both arrive safely.

        Args:
            room_id: Room to finish
            only_if_expired: Refuse to finish before the room's deadline
                (used for client-reported timeouts)

        Raises:
            RoomNotFoundError: If the room does not exist
            RoomNotActiveError: If the room has not started
            RoomClockRunningError: If only_if_expired and time is left
        """
        async with self._locks.hold(room_id):
            room = await self.get_room(room_id)
            if room.status == RoomStatus.FINISHED:
                return room
            if room.status != RoomStatus.PLAYING:
                raise RoomNotActiveError(room_id, room.status.value, RoomStatus.PLAYING.value)

            now = self._clock()
            if only_if_expired:
                deadline = room.deadline
                if deadline is None:
                    raise RoomNotActiveError(room_id, room.mode.value, GameMode.TIMED.value)
                if now < deadline:
                    raise RoomClockRunningError(room_id, int((deadline - now).total_seconds()) + 1)

            winner, is_draw = decide_timeout(room)
            updated = await self._store.update(
                room_id,
                {
                    "status": RoomStatus.FINISHED,
                    "winner": winner,
                    "is_draw": is_draw,
                    "finished_at": now,
                },
                expected_version=room.version,
            )

        logger.info(f"Room {room_id} timed out, winner {winner or 'none (draw)'}")
        await self._on_finished(updated)
        return updated

    async def resume_pending(self) -> int:
        """
        Re-arm clocks of timed rooms that were playing when the process
        stopped. Rooms already past their deadline finish right away.
        """
        if self._timers is None:
            return 0
        rooms = await self._store.query(
            predicate=lambda room: room.mode == GameMode.TIMED,
            where={"status": RoomStatus.PLAYING},
        )
        for room in rooms:
            self._arm_clock(room)
        if rooms:
            logger.info(f"Resumed clocks for {len(rooms)} timed rooms")
        return len(rooms)

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _join(self, room_id: str, user_id: str) -> JoinResult:
        async with self._locks.hold(room_id):
            room = await self._store.get(room_id)
            if room is None:
                return JoinResult(outcome=JoinOutcome.NOT_FOUND)
            if room.has_player(user_id):
                return JoinResult(outcome=JoinOutcome.ALREADY_IN_ROOM, room=room)
            if room.is_full:
                return JoinResult(outcome=JoinOutcome.ROOM_FULL, room=room)
            if room.status != RoomStatus.WAITING:
                return JoinResult(outcome=JoinOutcome.NOT_FOUND)

            player = await self._player_snapshot(user_id)
            updated = await self._store.update(
                room_id,
                {"players": room.players + [player]},
                expected_version=room.version,
            )
        logger.info(f"User {user_id} joined room {room_id}")
        return JoinResult(outcome=JoinOutcome.JOINED, room=updated)

    async def _player_snapshot(self, user_id: str) -> Player:
        if self._profiles is None:
            return Player(user_id=user_id)
        user = await self._profiles.get(user_id)
        if user is None:
            return Player(user_id=user_id)
        return Player(user_id=user_id, display_name=user.display_name, photo_url=user.photo_url)

    async def _unused_code(self) -> str:
        code = generate_room_code(self._rng)
        for _ in range(CODE_ATTEMPTS - 1):
            taken = await self._store.query(where={"code": code, "status": RoomStatus.WAITING})
            if not taken:
                break
            code = generate_room_code(self._rng)
        return code

    async def _spend_lives(self, players: list[Player]) -> tuple[dict[str, PlayPermission], list[str]]:
        """
        Spend a life per player and collect the ones refused.

        The spend itself is the check, so two rooms starting at once cannot
        both pass on a user's last life.
        """
        spent: dict[str, PlayPermission] = {}
        if self._lives is None:
            return spent, []
        blocked: list[str] = []
        for player in players:
            permission = await self._lives.consume_for_game(player.user_id)
            if permission.allowed:
                spent[player.user_id] = permission
            else:
                blocked.append(player.user_id)
        return spent, blocked

    async def _refund_lives(self, spent: dict[str, PlayPermission]) -> None:
        if self._lives is None:
            return
        for user_id, permission in spent.items():
            await self._lives.refund_game(user_id, permission)
            logger.info(f"Refunded game start for {user_id}")

    def _arm_clock(self, room: GameRoom) -> None:
        deadline = room.deadline
        if self._timers is None or deadline is None:
            return

        async def on_timeout() -> None:
            await self.end_by_timeout(room.id)

        self._timers.schedule_at(room_clock_label(room.id), deadline, on_timeout)

    async def _on_finished(self, room: GameRoom) -> None:
        if self._timers is not None:
            self._timers.cancel(room_clock_label(room.id))
        if self._stats is None:
            return
        for player in room.players:
            await self._stats.record_game_result(
                GameResult(
                    user_id=player.user_id,
                    score=player.score,
                    words_found=len(player.words_submitted),
                    won=room.winner == player.user_id,
                )
            )
