"""
TV allocation.

Every game occurrence is mapped onto TV numbers 1..N, one calendar date at a
time. The same repair pass is applied to whatever plan comes in (an oracle
proposal, the round-robin fallback seed, or nothing at all), so the output
always satisfies:

- a TV never carries two different games in the same (date, time slot)
- a time slot with a single game is shown on every TV
- every TV has something to show on any date that has games
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from itertools import combinations
from app.core.exceptions import ConfigurationError
from app.schemas.calendar import Assignment
from app.services.scoring import ScoredGame
from app.services.timefmt import game_date_key, slot_sort_key

logger = logging.getLogger(__name__)


@dataclass
class AllocationResult:
    assignments: list[Assignment] = field(default_factory=list)
    conflicts: list[tuple[Assignment, Assignment]] = field(default_factory=list)
    repairs: list[str] = field(default_factory=list)


def find_conflicts(assignments) -> list[tuple[Assignment, Assignment]]:
    """Pairs sharing (tv, date, slot) but showing different games."""
    by_slot = defaultdict(list)
    for a in assignments:
        by_slot[(a.tv_number, a.date, a.time_slot)].append(a)

    conflicts = []
    for group in by_slot.values():
        for first, second in combinations(group, 2):
            if first.game_id != second.game_id:
                conflicts.append((first, second))
    return conflicts


def ordered(assignments) -> list[Assignment]:
    return sorted(
        assignments,
        key=lambda a: (a.date, slot_sort_key(a.time_slot), a.tv_number, a.game_id),
    )


class TvAllocator:
    def __init__(self, number_of_tvs: int):
        if number_of_tvs < 1:
            raise ConfigurationError(
                f"numberOfTvs must be at least 1 (got {number_of_tvs})"
            )
        self.number_of_tvs = number_of_tvs

    @property
    def tv_numbers(self):
        return range(1, self.number_of_tvs + 1)

    # Fallback plan when no oracle is available: walk games in time-slot
    # string order and hand them to TVs cyclically.
    def seed(self, games: list[ScoredGame], note: str = "") -> list[Assignment]:
        by_time = sorted(games, key=lambda sg: sg.game.game_status_text)
        plan = []
        for index, sg in enumerate(by_time):
            tv = (index % self.number_of_tvs) + 1
            plan.append(
                Assignment(
                    game_id=sg.game_id,
                    tv_number=tv,
                    date=game_date_key(sg.game),
                    time_slot=sg.game.game_status_text,
                    reasoning=f"Scheduled on TV {tv} - sequential scheduling "
                    f"for continuous coverage{note}",
                )
            )
        return plan

    def allocate(self, games: list[ScoredGame], proposed=None, dates=None):
        """
        Repair `proposed` (may be None or partial) into a complete plan.

        `proposed` items need game_id, tv_number and reasoning; their date and
        time slot are always re-derived from the game itself.
        """
        if not games:
            return AllocationResult()

        ranked = self._rank(games)
        by_id = {sg.game_id: sg for sg in ranked}
        repairs = []
        claims = self._claims(proposed or [], by_id, repairs)

        games_by_date = defaultdict(list)
        for sg in ranked:
            games_by_date[game_date_key(sg.game)].append(sg)

        assignments = []
        for day in sorted(set(games_by_date) | set(dates or ())):
            day_games = games_by_date.get(day)
            if not day_games:
                logger.debug(f"No games on {day}, nothing to assign")
                continue
            assignments.extend(self._allocate_day(day, day_games, claims))

        assignments.extend(self._global_sweep(assignments, ranked))
        assignments = ordered(assignments)

        conflicts = find_conflicts(assignments)
        for first, second in conflicts:
            logger.error(
                f"TV {first.tv_number} double-booked on {first.date} "
                f"at {first.time_slot}: {first.game_id} vs {second.game_id}"
            )

        return AllocationResult(assignments, conflicts, repairs)

    def _rank(self, games):
        # highest priority first; the first copy of a duplicated game id wins
        seen = set()
        ranked = []
        for sg in sorted(games, key=lambda g: g.priority, reverse=True):
            if sg.game_id in seen:
                continue
            seen.add(sg.game_id)
            ranked.append(sg)
        return ranked

    def _claims(self, proposed, by_id, repairs):
        claims = {}
        for proposal in proposed:
            sg = by_id.get(proposal.game_id)
            if sg is None:
                repairs.append(f"Dropped assignment for unknown game {proposal.game_id}")
                continue
            if proposal.tv_number not in self.tv_numbers:
                repairs.append(
                    f"Dropped assignment of {proposal.game_id} to TV "
                    f"{proposal.tv_number} (only {self.number_of_tvs} TVs)"
                )
                continue

            day = game_date_key(sg.game)
            slot = sg.game.game_status_text
            key = (day, slot, proposal.tv_number)
            candidate = Assignment(
                game_id=sg.game_id,
                tv_number=proposal.tv_number,
                date=day,
                time_slot=slot,
                reasoning=proposal.reasoning or f"Assigned to TV {proposal.tv_number}",
            )

            current = claims.get(key)
            if current is None:
                claims[key] = candidate
            elif current.game_id == candidate.game_id:
                continue
            elif sg.priority > by_id[current.game_id].priority:
                repairs.append(
                    f"TV {proposal.tv_number} on {day} at {slot}: kept "
                    f"{candidate.game_id} over lower priority {current.game_id}"
                )
                claims[key] = candidate
            else:
                repairs.append(
                    f"TV {proposal.tv_number} on {day} at {slot}: kept "
                    f"{current.game_id} over {candidate.game_id}"
                )

        for message in repairs:
            logger.warning(message)
        return claims

    def _allocate_day(self, day, day_games, claims):
        buckets = defaultdict(list)
        for sg in day_games:
            buckets[sg.game.game_status_text].append(sg)

        day_assignments = []
        for slot in sorted(buckets, key=slot_sort_key):
            day_assignments.extend(self._fill_bucket(day, slot, buckets[slot], claims))

        day_assignments.extend(self._backfill_day(day, day_games, day_assignments))
        return day_assignments

    def _fill_bucket(self, day, slot, bucket, claims):
        taken = {
            tv: claims[(day, slot, tv)]
            for tv in self.tv_numbers
            if (day, slot, tv) in claims
        }

        if len(bucket) == 1:
            sg = bucket[0]
            return [
                taken.get(tv)
                or Assignment(
                    game_id=sg.game_id,
                    tv_number=tv,
                    date=day,
                    time_slot=slot,
                    reasoning=f"Only game at {slot} - showing on every TV",
                )
                for tv in self.tv_numbers
            ]

        # simultaneous games: each free TV goes to the game holding the fewest
        # TVs so far, ties resolved in priority order (round-robin)
        counts = {sg.game_id: 0 for sg in bucket}
        for a in taken.values():
            counts[a.game_id] += 1

        filled = []
        for tv in self.tv_numbers:
            if tv in taken:
                filled.append(taken[tv])
                continue
            sg = min(bucket, key=lambda g: counts[g.game_id])
            counts[sg.game_id] += 1
            filled.append(
                Assignment(
                    game_id=sg.game_id,
                    tv_number=tv,
                    date=day,
                    time_slot=slot,
                    reasoning=self._split_reasoning(sg, len(bucket), slot),
                )
            )
        return filled

    def _split_reasoning(self, sg, games_in_slot, slot):
        favorite = ", favorite team playing" if sg.is_favorite else ""
        return (
            f"{sg.game.matchup} (priority {sg.priority}/10{favorite}) - "
            f"{games_in_slot} games start at {slot}, TVs split by priority"
        )

    def _backfill_day(self, day, day_games, day_assignments):
        used = {a.tv_number for a in day_assignments}
        idle = [tv for tv in self.tv_numbers if tv not in used]

        backfill = []
        for index, tv in enumerate(idle):
            sg = day_games[index % len(day_games)]
            backfill.append(
                Assignment(
                    game_id=sg.game_id,
                    tv_number=tv,
                    date=day,
                    time_slot=sg.game.game_status_text,
                    reasoning=f"Duplicate coverage on TV {tv} - "
                    "ensures no empty screens",
                )
            )
        if backfill:
            logger.info(f"Backfilled {len(backfill)} idle TVs on {day}")
        return backfill

    def _global_sweep(self, assignments, ranked):
        used = {a.tv_number for a in assignments}
        top = ranked[0]

        filler = []
        for tv in self.tv_numbers:
            if tv in used:
                continue
            filler.append(
                Assignment(
                    game_id=top.game_id,
                    tv_number=tv,
                    date=game_date_key(top.game),
                    time_slot=top.game.game_status_text,
                    reasoning=f"Duplicate coverage on TV {tv} - "
                    "top game of the week as filler",
                )
            )
        if filler:
            logger.info(f"Global sweep filled {len(filler)} idle TVs")
        return filler
