from pathlib import Path
import json
import sys
import pandas as pd

HERE = Path(__file__).resolve()
DATA_DIR = HERE.parent
IN_CSV = DATA_DIR / "world_happiness_report.csv"                           # WHR export
OUT_JSON = DATA_DIR.parent / "app" / "static" / "data" / "happiest_countries.json"

NAME_COLUMNS = ["Country name", "Country", "country", "name"]
SCORE_COLUMNS = ["Ladder score", "Happiness Score", "Score", "happinessScore"]


def pick_column(df: pd.DataFrame, candidates: list[str]) -> str:
    for col in candidates:
        if col in df.columns:
            return col
    raise ValueError(f"None of the columns {candidates} found; have {list(df.columns)}")


def build_dataset(df: pd.DataFrame) -> dict:
    name_col = pick_column(df, NAME_COLUMNS)
    score_col = pick_column(df, SCORE_COLUMNS)

    out = pd.DataFrame({
        "name": df[name_col].astype(str).str.strip(),
        "score": pd.to_numeric(df[score_col], errors="coerce"),
    })
    out = out[(out["name"] != "") & out["score"].notna()]
    out = out.drop_duplicates("name", keep="first").sort_values("score", ascending=False)

    # scores stay text, as the page parses them itself
    return {"data": [{"name": n, "happinessScore": f"{s:.3f}"} for n, s in zip(out["name"], out["score"])]}


def main(argv: list[str] | None = None):
    argv = sys.argv[1:] if argv is None else argv
    in_csv = Path(argv[0]) if len(argv) > 0 else IN_CSV
    out_json = Path(argv[1]) if len(argv) > 1 else OUT_JSON

    if not in_csv.exists():
        print(f"[ERROR] No input CSV at {in_csv}")
        return 1

    df = pd.read_csv(in_csv)
    try:
        dataset = build_dataset(df)
    except ValueError as e:
        print(f"[ERROR] {in_csv.name}: {e}")
        return 1

    skipped = len(df) - len(dataset["data"])
    if skipped:
        print(f"[WARN] skipped {skipped} row(s) without a name or a numeric score")

    out_json.parent.mkdir(parents=True, exist_ok=True)
    out_json.write_text(json.dumps(dataset, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"[DONE] countries: {len(dataset['data'])} → {out_json}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
