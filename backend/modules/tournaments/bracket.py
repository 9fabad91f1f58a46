"""
Single-elimination bracket helpers.

Pure functions over participants and rounds. Pairing is positional: the
i-th and (i+1)-th entries meet, with no seeding. An odd one out gets a
bye, which is a completed match that advances them without playing.
"""

from typing import Iterable, Optional
import random

from .models import (
    BOT_NAMES,
    Match,
    MatchStatus,
    TournamentPlayer,
    TournamentRound,
)

BOT_SCORE_RANGE = (20, 120)


def make_bots(tournament_id: str, count: int, start_index: int = 0) -> list[TournamentPlayer]:
    """Bots named from the fixed pool, cycling when more are needed."""
    return [
        TournamentPlayer(
            user_id=f"bot_{tournament_id}_{index}",
            display_name=BOT_NAMES[index % len(BOT_NAMES)],
            is_bot=True,
        )
        for index in range(start_index, start_index + count)
    ]


def pair_players(player_ids: list[str], round_number: int) -> TournamentRound:
    matches = []
    for i in range(0, len(player_ids) - 1, 2):
        matches.append(Match(player1=player_ids[i], player2=player_ids[i + 1]))
    if len(player_ids) % 2 == 1:
        lone = player_ids[-1]
        matches.append(Match(player1=lone, player2=None, winner=lone, status=MatchStatus.COMPLETED))
    return TournamentRound(round_number=round_number, matches=matches)


def resolve_bot_matches(
    round_: TournamentRound,
    bot_ids: Iterable[str],
    rng: random.Random,
) -> TournamentRound:
    """
    Play out every pending bot-vs-bot match with simulated scores.

    Ties go to player1.
    """
    bots = set(bot_ids)
    matches = []
    for match in round_.matches:
        if match.is_completed or match.player1 not in bots or match.player2 not in bots:
            matches.append(match)
            continue
        score1 = rng.randint(*BOT_SCORE_RANGE)
        score2 = rng.randint(*BOT_SCORE_RANGE)
        matches.append(
            match.model_copy(
                update={
                    "score1": score1,
                    "score2": score2,
                    "winner": match.player1 if score1 >= score2 else match.player2,
                    "status": MatchStatus.COMPLETED,
                }
            )
        )
    return round_.model_copy(update={"matches": matches})


def round_winners(round_: TournamentRound) -> list[str]:
    """Winners of a completed round, in match order."""
    return [match.winner for match in round_.matches if match.winner is not None]


def round_losers(round_: TournamentRound) -> list[str]:
    return [match.loser for match in round_.matches if match.loser is not None]


def mark_eliminated(participants: list[TournamentPlayer], losers: Iterable[str]) -> list[TournamentPlayer]:
    out = set(losers)
    return [
        participant.model_copy(update={"eliminated": True})
        if participant.user_id in out and not participant.eliminated
        else participant
        for participant in participants
    ]


def promote(participants: list[TournamentPlayer], winners: Iterable[str], round_number: int) -> list[TournamentPlayer]:
    advancing = set(winners)
    return [
        participant.model_copy(update={"current_round": round_number})
        if participant.user_id in advancing
        else participant
        for participant in participants
    ]


def advance_bracket(
    participants: list[TournamentPlayer],
    rounds: list[TournamentRound],
    rng: random.Random,
) -> tuple[list[TournamentPlayer], list[TournamentRound], Optional[str]]:
    """
    Move the bracket forward as far as it can go without a human result.

    Resolves bot-vs-bot matches in the last round, eliminates losers and,
    once the round is complete, pairs its winners (in match order) into the
    next round. A completed round with a single match is the final.

    Returns:
        Updated participants, updated rounds, and the champion if decided
    """
    bots = {participant.user_id for participant in participants if participant.is_bot}
    rounds = list(rounds)

    while rounds:
        current = resolve_bot_matches(rounds[-1], bots, rng)
        rounds[-1] = current
        participants = mark_eliminated(participants, round_losers(current))
        if not current.is_completed:
            return participants, rounds, None

        winners = round_winners(current)
        if len(current.matches) == 1:
            return participants, rounds, winners[0] if winners else None

        next_number = current.round_number + 1
        rounds.append(pair_players(winners, next_number))
        participants = promote(participants, winners, next_number)

    return participants, rounds, None
