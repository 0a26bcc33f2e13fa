"""
Command-line entry point: play one scenario between two agents.

    skirmish-play --scenario skirmish --agent minimax --plies 3
    SKIRMISH_PLIES=2 skirmish-play --scenario dynamic-path --agent astar

A missing or invalid ply count for the minimax agent is fatal: the
process exits with status 2 before the first turn.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Dict, List, Optional

from agents import AgentSpec, available_agents, create_agent_from_spec
from infra.logger import configure_logging, get_logger
from skirmish.core.errors import ConfigurationError, SkirmishError
from skirmish.model.state import CombatSnapshot
from skirmish.scenarios import SCENARIOS, load_scenario
from .runner import MatchRunner

log = get_logger(__name__)

EXIT_OK = 0
EXIT_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skirmish-play",
        description="Run a grid skirmish between two agents.",
    )
    parser.add_argument("--scenario", choices=sorted(SCENARIOS), default="skirmish", help="Scenario preset")
    parser.add_argument("--agent", default="minimax", help=f"Agent for player 0 ({', '.join(available_agents())} or module.Class)")
    parser.add_argument("--opponent", default="random", help="Agent for player 1, or 'none' to pass every turn")
    parser.add_argument("--plies", default=None, help="Search depth in plies (default: $SKIRMISH_PLIES)")
    parser.add_argument("--max-turns", type=int, default=200, help="Draw after this many turns")
    parser.add_argument("--time-budget", type=float, default=None, help="Seconds per search for iterative deepening")
    parser.add_argument("--allow-stacking", action="store_true", help="Let joint moves share a destination cell")
    parser.add_argument("--seed", type=int, default=None, help="Seed for random agents")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    parser.add_argument("--logfile", default=None, help="Also append logs to this file")
    return parser


def agent_params(agent_type: str, args: argparse.Namespace) -> Dict[str, Any]:
    """Constructor keyword arguments understood by each registered agent."""
    if agent_type == "minimax":
        params: Dict[str, Any] = {"plies": args.plies, "allow_stacking": args.allow_stacking}
        if args.time_budget is not None:
            params["time_budget"] = args.time_budget
        return params
    if agent_type == "random":
        return {"seed": args.seed}
    return {}


def build_agents(args: argparse.Namespace) -> Dict[int, Any]:
    specs = [AgentSpec(type=args.agent, player=0, init_params=agent_params(args.agent, args))]
    if args.opponent.lower() != "none":
        specs.append(AgentSpec(type=args.opponent, player=1, init_params=agent_params(args.opponent, args)))
    return {spec.player: create_agent_from_spec(spec) for spec in specs}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, json=args.json_logs, logfile=args.logfile)

    try:
        agents = build_agents(args)
    except ConfigurationError as exc:
        log.error("Configuration error: %s", exc)
        return EXIT_CONFIG
    except (ValueError, TypeError, ImportError) as exc:
        log.error("Cannot build agents: %s", exc)
        return EXIT_CONFIG

    world = load_scenario(args.scenario)
    runner = MatchRunner.from_world(world, agents, max_turns=args.max_turns)
    try:
        result = runner.run_episode()
    except SkirmishError as exc:
        log.error("Match aborted: %s", exc)
        return 1

    print(CombatSnapshot.from_world(result.final_world, player=0).render())
    print(f"{result.victory} after {result.turns} turns")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
