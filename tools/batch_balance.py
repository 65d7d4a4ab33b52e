# tools/batch_balance.py
from __future__ import annotations
import argparse, logging
from typing import Any, Dict, List

import pandas as pd

from procareer.career import Career
from procareer.config import DEFAULT_SEED
from procareer.roster import ClubRoster
from procareer.types import Position

# --- knobs ---
START_AGE = 16
NATIONALITY = "England"
POSITIONS = {p.name: p for p in Position}


def run_career(seed: int, seasons: int, position: Position, roster: ClubRoster) -> List[Dict[str, Any]]:
    car = Career.new(f"Sim-{seed}", START_AGE, NATIONALITY, position, roster=roster, seed=seed)
    rows: List[Dict[str, Any]] = []
    for _ in range(seasons):
        out = car.play_season()
        rec = out.record
        rows.append({
            "seed": seed,
            "year": rec.year,
            "age": rec.age,
            "club": rec.club.name,
            "tier": rec.club.tier,
            "level": rec.stats.level.value,
            "apps": rec.stats.total.matches,
            "goals": rec.stats.total.goals,
            "assists": rec.stats.total.assists,
            "rating": rec.stats.total.rating,
            "ability": car.player.current_ability,
            "fatigue": car.player.fatigue,
            "value": car.player.market_value,
            "trophies": len(rec.trophies),
            "awards": len(out.awards),
        })
        if out.forced_retirement:
            break
    return rows


def main() -> int:
    ap = argparse.ArgumentParser(description="Run seeded careers and summarize output by age.")
    ap.add_argument("--careers", type=int, default=50)
    ap.add_argument("--seasons", type=int, default=18)
    ap.add_argument("--position", choices=sorted(POSITIONS), default="FWD")
    ap.add_argument("--seed", type=int, default=DEFAULT_SEED)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    roster = ClubRoster.default()
    rows: List[Dict[str, Any]] = []
    for i in range(args.careers):
        rows.extend(run_career(args.seed + i, args.seasons, POSITIONS[args.position], roster))

    df = pd.DataFrame(rows)
    if df.empty:
        print("[batch] no seasons played")
        return 0

    by_age = df.groupby("age").agg(
        careers=("seed", "nunique"),
        apps=("apps", "mean"),
        goals=("goals", "mean"),
        rating=("rating", "mean"),
        ability=("ability", "mean"),
        fatigue=("fatigue", "mean"),
    ).round(2)

    print(f"[batch] careers={args.careers} seasons<={args.seasons} position={args.position} seed={args.seed}")
    print(by_age.to_string())
    print(f"[batch] mean trophies/season={df['trophies'].mean():.2f}  awards/season={df['awards'].mean():.2f}  "
          f"peak ability={df['ability'].max()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
