#!/usr/bin/env python
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse, json
from pathlib import Path
from datetime import datetime, timezone
import pandas as pd

from portfolio_page.happiness import parse_happiness


def summarize(payload: dict) -> dict:
    entries = parse_happiness(payload)
    rows = payload["data"]
    df = pd.DataFrame(entries, columns=["name", "score"])
    dupes = sorted(df.loc[df["name"].duplicated(), "name"].unique().tolist())
    return {
        "rows": len(rows),
        "countries": int(df["name"].nunique()),
        "dropped_rows": len(rows) - len(df),
        "duplicate_names": dupes,
        "score_min": float(df["score"].min()) if len(df) else None,
        "score_max": float(df["score"].max()) if len(df) else None,
        "score_mean": round(float(df["score"].mean()), 3) if len(df) else None,
        "out_of_range": df.loc[(df["score"] < 0) | (df["score"] > 10), "name"].tolist(),
    }


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Validate happiest_countries.json and print a summary.")
    ap.add_argument("--in_json", default="src/app/static/data/happiest_countries.json", help="dataset to check")
    ap.add_argument("--report_json", required=False, help="optional output JSON with the summary")
    args = ap.parse_args(argv)

    path = Path(args.in_json)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
        meta = summarize(payload)
    except (OSError, ValueError) as e:
        raise SystemExit(f"[ERROR] {path}: {e}")

    meta = {"timestamp": datetime.now(timezone.utc).isoformat(), "file": str(path), **meta}
    if args.report_json:
        out = Path(args.report_json)
        out.parent.mkdir(parents=True, exist_ok=True)
        with open(out, "w", encoding="utf-8") as f:
            json.dump(meta, f, indent=2)
        print("[OK] report written:", str(out))

    print(json.dumps(meta, indent=2, ensure_ascii=False))
    if meta["dropped_rows"] or meta["duplicate_names"] or meta["out_of_range"]:
        print("[WARN] dataset has dropped, duplicate or out-of-range rows")
    return 0 if meta["countries"] else 1


if __name__ == "__main__":
    raise SystemExit(main())
