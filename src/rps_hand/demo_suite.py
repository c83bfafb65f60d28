"""Scripted game rounds for exercising the hand without a game engine."""

import time

from rps_hand.adapters.output_base import CountdownState, GameOutput
from rps_hand.errors import HandError
from rps_hand.protocol.commands import Move
from rps_hand.util.logger import get_logger

logger = get_logger("rps_hand.demo")

DEMO_SCENARIOS = [
    {
        "name": "Robot wins",
        "robot": Move.PAPER,
        "human": Move.ROCK,
        "outcome": "robot",
    },
    {
        "name": "Human wins",
        "robot": Move.SCISSORS,
        "human": Move.ROCK,
        "outcome": "human",
    },
    {
        "name": "Tie",
        "robot": Move.SCISSORS,
        "human": Move.SCISSORS,
        "outcome": "tie",
    },
]

COUNTDOWN = (CountdownState.THREE, CountdownState.TWO, CountdownState.ONE, CountdownState.SHOOT)


def run_round(output: GameOutput, scenario, pause_s: float = 1.0, sleep=time.sleep):
    """Play one round: countdown, shoot, outcome."""
    for state in COUNTDOWN:
        output.on_countdown_tick(state)
        sleep(pause_s)

    robot, human = scenario["robot"], scenario["human"]
    output.on_move_chosen(robot)
    sleep(pause_s)

    outcome = scenario["outcome"]
    if outcome == "robot":
        output.on_robot_win(robot, human)
    elif outcome == "human":
        output.on_human_win(robot, human)
    elif outcome == "tie":
        output.on_tie(robot)
    else:
        raise ValueError(f"Unknown outcome '{outcome}' in scenario '{scenario['name']}'")
    logger.info({"event": "round_played", "scenario": scenario["name"],
                 "robot": robot.name, "human": human.name, "outcome": outcome})
    sleep(pause_s)


def run_demo_suite(output: GameOutput, scenarios=None, pause_s: float = 1.0, idle_s: float = 0.0, sleep=time.sleep):
    """Run scripted rounds as one game, optionally idling before and after.

    Returns the final score as ``(robot, human)``.
    """
    scenarios = DEMO_SCENARIOS if scenarios is None else scenarios
    robot_score = human_score = 0

    if idle_s > 0:
        output.enter_idle()
        sleep(idle_s)

    output.on_game_start()
    logger.info({"event": "game_start", "rounds": len(scenarios)})
    try:
        for scenario in scenarios:
            run_round(output, scenario, pause_s=pause_s, sleep=sleep)
            if scenario["outcome"] == "robot":
                robot_score += 1
            elif scenario["outcome"] == "human":
                human_score += 1
            output.on_score_update(robot_score, human_score)
    except HandError as e:
        logger.error({"event": "hand_failure", "error": str(e)})
        raise
    output.on_game_stop()
    logger.info({"event": "game_stop", "robot": robot_score, "human": human_score})

    if idle_s > 0:
        output.enter_idle()
        sleep(idle_s)
    return robot_score, human_score
