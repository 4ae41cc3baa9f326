"""Round-based combat engine.

One ``CombatEngine`` owns a grid, the agent registry, the position index and
the round counter of a single simulation. ``step_round`` plays one round:
the living agents are ordered by reading order of their positions at round
start and each takes a turn of identify targets, maybe move, maybe attack.
Agents killed earlier in the round are skipped when their entry comes up.

Combat ends the moment an agent finds no living opponent. That round is not
counted: ``completed_rounds`` only advances after every entry of the round's
turn list has been processed.

Observers are notified after each mutation has been fully applied, so an
observer that raises never leaves the registry and the position index out
of sync.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from beverage_bandits.domain.agents import Agent, AgentStatus, Faction
from beverage_bandits.domain.errors import CombatStalled, ContractViolation
from beverage_bandits.domain.grid import Cell, Grid, adjacent_cells, is_adjacent, reading_order
from beverage_bandits.domain.pathfinding import MoveDecision, Step, choose_step
from beverage_bandits.domain.position_index import PositionIndex
from beverage_bandits.domain.snapshot import AgentState, CombatSnapshot
from beverage_bandits.simulation.outcome import Outcome, compute_outcome

logger = logging.getLogger(__name__)


class TurnPhase(Enum):
    """Sub-steps of one agent's turn, plus the terminal state of the whole combat."""

    IDENTIFY_TARGETS = "identify_targets"
    MAYBE_MOVE = "maybe_move"
    MAYBE_ATTACK = "maybe_attack"
    END_TURN = "end_turn"
    ENDED = "ended"


@dataclass(frozen=True)
class Attack:
    attacker_id: int
    target_id: int
    damage: int
    target_hp: int
    killed: bool


@dataclass(frozen=True)
class TurnResult:
    """What one agent did on its turn."""

    agent_id: int
    start: Cell
    end: Cell
    decision: MoveDecision | None = None
    """Movement decision; None when already adjacent to a target or combat ended."""
    attack: Attack | None = None
    ended_combat: bool = False

    @property
    def moved(self) -> bool:
        return self.start != self.end


@dataclass(frozen=True)
class RoundResult:
    round_number: int
    completed: bool
    turns: tuple[TurnResult, ...]


class CombatObserver:
    """Read-only hooks into the engine; override the ones you need.

    Hooks receive the engine itself and must not mutate it.
    """

    def on_round_start(self, engine: CombatEngine) -> None:
        pass

    def on_move(self, engine: CombatEngine, agent: AgentState, step: Step) -> None:
        pass

    def on_attack(self, engine: CombatEngine, attack: Attack) -> None:
        pass

    def on_turn_end(self, engine: CombatEngine, turn: TurnResult) -> None:
        pass

    def on_round_end(self, engine: CombatEngine, result: RoundResult) -> None:
        pass

    def on_combat_end(self, engine: CombatEngine) -> None:
        pass


def select_attack_target(candidates: Iterable[Agent]) -> Agent | None:
    """Lowest hp wins; ties go to the first position in reading order."""
    return min(
        (agent for agent in candidates if agent.alive),
        key=lambda agent: (agent.hp, reading_order(agent.position)),
        default=None,
    )


class CombatEngine:
    """Deterministic turn engine for one combat."""

    def __init__(
        self,
        grid: Grid,
        agents: Iterable[Agent],
        observers: Iterable[CombatObserver] = (),
    ) -> None:
        self.grid = grid
        self.agents: dict[int, Agent] = {}
        self.positions = PositionIndex()
        for agent in agents:
            if agent.agent_id in self.agents:
                raise ContractViolation(f"duplicate agent id {agent.agent_id}")
            if not grid.passable(agent.position):
                raise ContractViolation(
                    f"agent {agent.agent_id} starts on non-floor cell {agent.position}"
                )
            self.agents[agent.agent_id] = agent
            if agent.alive:
                self.positions.place(agent.agent_id, agent.position)

        self.completed_rounds = 0
        self.finished = False
        self.phase = TurnPhase.IDENTIFY_TARGETS
        self.active_agent_id: int | None = None
        self.target_agent_id: int | None = None
        self.current_path: tuple[Cell, ...] = ()
        self._observers: list[CombatObserver] = list(observers)

    # -----------------------------------------------------------------------
    # Read-only queries
    # -----------------------------------------------------------------------

    @property
    def current_round(self) -> int:
        """1-based number of the round in progress (or about to start)."""
        return self.completed_rounds + 1

    @property
    def winner(self) -> Faction | None:
        if not self.finished:
            return None
        factions = {agent.faction for agent in self.living_agents()}
        return factions.pop() if len(factions) == 1 else None

    def living_agents(self, faction: Faction | None = None) -> list[Agent]:
        """Living agents in reading order of position, optionally of one faction."""
        living = (self.agents[agent_id] for _, agent_id in self.positions.items())
        return [a for a in living if faction is None or a.faction is faction]

    def agent_at(self, cell: Cell) -> Agent | None:
        agent_id = self.positions.occupant(cell)
        return None if agent_id is None else self.agents[agent_id]

    def targets_of(self, agent: Agent) -> list[Agent]:
        return self.living_agents(agent.faction.opponent)

    def adjacent_enemies(self, agent: Agent) -> list[Agent]:
        """Living opponents orthogonally adjacent to *agent*, in reading order."""
        enemies: list[Agent] = []
        for cell in adjacent_cells(agent.position):
            other = self.agent_at(cell)
            if other is not None and other.is_enemy_of(agent):
                enemies.append(other)
        return enemies

    def turn_order(self) -> list[tuple[Cell, int]]:
        """``(position, agent_id)`` of living agents in reading order."""
        return self.positions.items()

    def total_hp(self, faction: Faction) -> int:
        return sum(agent.hp for agent in self.living_agents(faction))

    def casualties(self, faction: Faction) -> int:
        return sum(1 for a in self.agents.values() if a.faction is faction and not a.alive)

    def snapshot(self) -> CombatSnapshot:
        return CombatSnapshot(
            completed_rounds=self.completed_rounds,
            finished=self.finished,
            agents=tuple(AgentState.of(self.agents[i]) for i in sorted(self.agents)),
        )

    def check_invariants(self) -> None:
        """Raise ContractViolation if the registry and the position index disagree."""
        living = [agent for agent in self.agents.values() if agent.alive]
        if len(living) != len(self.positions):
            raise ContractViolation(
                f"{len(living)} living agents but {len(self.positions)} indexed cells"
            )
        for agent in living:
            if self.positions.occupant(agent.position) != agent.agent_id:
                raise ContractViolation(f"agent {agent.agent_id} is not indexed at its position")
            if not self.grid.passable(agent.position):
                raise ContractViolation(f"agent {agent.agent_id} stands on a wall")

    # -----------------------------------------------------------------------
    # Observers
    # -----------------------------------------------------------------------

    def add_observer(self, observer: CombatObserver) -> None:
        self._observers.append(observer)

    def _notify(self, hook: str, *args: object) -> None:
        for observer in self._observers:
            getattr(observer, hook)(self, *args)

    # -----------------------------------------------------------------------
    # Simulation
    # -----------------------------------------------------------------------

    def step_round(self) -> RoundResult:
        """Play one round. Returns early, uncounted, if combat ends during it."""
        if self.finished:
            raise ContractViolation("combat has already ended")

        round_number = self.current_round
        order = self.turn_order()
        self._notify("on_round_start")

        turns: list[TurnResult] = []
        for _, agent_id in order:
            agent = self.agents[agent_id]
            if not agent.alive:
                continue
            turn = self._take_turn(agent)
            turns.append(turn)
            if turn.ended_combat:
                logger.info(
                    "Combat ended during round %d: %s found no targets",
                    round_number,
                    agent.faction.label,
                )
                self._notify("on_combat_end")
                return RoundResult(round_number=round_number, completed=False, turns=tuple(turns))

        self.completed_rounds += 1
        result = RoundResult(round_number=round_number, completed=True, turns=tuple(turns))
        logger.debug(
            "Round %d complete: elves=%d hp, goblins=%d hp",
            round_number,
            self.total_hp(Faction.ELF),
            self.total_hp(Faction.GOBLIN),
        )
        self._notify("on_round_end", result)
        return result

    def run(self, max_rounds: int | None = None) -> Outcome:
        """Play rounds until one faction is eliminated and return the score.

        Raises :class:`CombatStalled` when *max_rounds* rounds have completed
        and combat is still running.
        """
        while not self.finished:
            if max_rounds is not None and self.completed_rounds >= max_rounds:
                raise CombatStalled(self.completed_rounds)
            self.step_round()
        return compute_outcome(self)

    def _take_turn(self, agent: Agent) -> TurnResult:
        self.active_agent_id = agent.agent_id
        start = agent.position

        self.phase = TurnPhase.IDENTIFY_TARGETS
        targets = self.targets_of(agent)
        if not targets:
            self.phase = TurnPhase.ENDED
            self.finished = True
            self._clear_focus()
            return TurnResult(agent_id=agent.agent_id, start=start, end=start, ended_combat=True)

        self.phase = TurnPhase.MAYBE_MOVE
        decision: MoveDecision | None = None
        if not any(is_adjacent(start, target.position) for target in targets):
            decision = choose_step(
                self.grid, self.positions, start, [target.position for target in targets]
            )
            if isinstance(decision, Step):
                self._move(agent, decision)
            else:
                agent.status = AgentStatus.NOT_MOVING

        self.phase = TurnPhase.MAYBE_ATTACK
        attack = self._attack(agent)

        self.phase = TurnPhase.END_TURN
        turn = TurnResult(
            agent_id=agent.agent_id,
            start=start,
            end=agent.position,
            decision=decision,
            attack=attack,
        )
        logger.debug(
            "Round %d: %s %d %s -> %s%s",
            self.current_round,
            agent.faction.label,
            agent.agent_id,
            start,
            agent.position,
            f", hit {attack.target_id} ({attack.target_hp} hp)" if attack else "",
        )
        self._notify("on_turn_end", turn)
        agent.status = AgentStatus.IDLE
        self._clear_focus()
        return turn

    def _move(self, agent: Agent, step: Step) -> None:
        self.positions.move(agent.agent_id, step.cell)
        agent.move_to(step.cell)
        agent.status = AgentStatus.MOVING
        self.current_path = step.path
        self._notify("on_move", AgentState.of(agent), step)

    def _attack(self, agent: Agent) -> Attack | None:
        target = select_attack_target(self.adjacent_enemies(agent))
        if target is None:
            return None
        agent.status = AgentStatus.ATTACKING
        self.target_agent_id = target.agent_id
        killed = target.take_damage(agent.attack_power)
        if killed:
            self.positions.remove(target.agent_id)
            logger.debug("%s %d died", target.faction.label, target.agent_id)
        attack = Attack(
            attacker_id=agent.agent_id,
            target_id=target.agent_id,
            damage=agent.attack_power,
            target_hp=target.hp,
            killed=killed,
        )
        self._notify("on_attack", attack)
        return attack

    def _clear_focus(self) -> None:
        self.active_agent_id = None
        self.target_agent_id = None
        self.current_path = ()
