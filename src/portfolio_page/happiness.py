from __future__ import annotations
import json
import logging
import math
from typing import Any, Callable, List, Optional, Sequence, Tuple

import pandas as pd
import streamlit.components.v1 as components

from .client import BackendError, load_json_source

logger = logging.getLogger(__name__)

Entry = Tuple[str, float]
REQUIRED = {"name", "happinessScore"}
UNIT = "Happiness score (0–10)"
CHART_HEIGHT = 520


def parse_happiness(payload) -> List[Entry]:
    """Turn `{"data": [{"name", "happinessScore"}, ...]}` into (name, score) pairs.

    Scores may be text or numbers. Rows whose score does not parse are dropped.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
        raise ValueError("Happiness data must be an object with a 'data' list")
    rows = payload["data"]
    if not rows:
        return []
    df = pd.DataFrame(rows)
    missing = REQUIRED - set(df.columns)
    if missing:
        raise ValueError(f"Missing fields in happiness data: {sorted(missing)}")
    df = df[df["name"].notna()].copy()
    df["name"] = df["name"].astype(str).str.strip()
    df["score"] = pd.to_numeric(df["happinessScore"], errors="coerce")
    bad = df["score"].isna()
    if bad.any():
        logger.warning("Dropping %d happiness row(s) without a numeric score: %s",
                       int(bad.sum()), df.loc[bad, "name"].tolist())
    df = df[~bad]
    return [(n, float(s)) for n, s in zip(df["name"], df["score"])]


def score_clip(entries: Sequence[Entry]) -> Tuple[float, float]:
    if not entries:
        return (0.0, 10.0)
    scores = [s for _, s in entries]
    lo, hi = math.floor(min(scores) * 10) / 10, math.ceil(max(scores) * 10) / 10
    if lo == hi:
        lo, hi = lo - 0.5, hi + 0.5
    return (lo, hi)


def build_payload(entries: Sequence[Entry]) -> dict:
    return {
        "values": {name: round(score, 3) for name, score in entries},
        "clip": list(score_clip(entries)),
        "unit": UNIT,
    }


HTML = r"""
<!doctype html>
<html>
<head>
<meta charset="utf-8"/>
<style>
  html,body{margin:0; padding:0; height:100%; background:#000; overflow:hidden}
  #root{position:absolute; inset:0; background:#000;}
  .panel{
    position:absolute; top:12px; right:12px; z-index:9998;
    background:rgba(0,0,0,.45); color:#fff; padding:10px 12px; border-radius:10px;
    font:12px/1.35 -apple-system,BlinkMacSystemFont,Segoe UI,Roboto,Helvetica,Arial,sans-serif;
    border:1px solid rgba(255,255,255,.2); backdrop-filter:blur(3px);
  }
  .grad{width:200px; height:10px; margin:6px 0 4px; background:linear-gradient(90deg,#2b6cff,#ffffff,#ffd21f);}
  .scale{width:200px; display:flex; justify-content:space-between}
</style>
<script src="https://unpkg.com/three@0.155.0/build/three.min.js"></script>
<script src="https://unpkg.com/globe.gl@2.33.1/dist/globe.gl.min.js"></script>
</head>
<body>
<div id="root"></div>
<div class="panel">
  <div><b>__UNIT__</b></div>
  <div class="grad"></div>
  <div class="scale"><span>__MIN__</span><span>__MAX__</span></div>
</div>
<script>
  const PAYLOAD = __PAYLOAD__;
  const VALUES = PAYLOAD.values;
  const MIN = PAYLOAD.clip[0], MAX = PAYLOAD.clip[1];

  const ALIASES = {
    "United States of America": "United States",
    "Czechia": "Czech Republic",
    "Dem. Rep. Congo": "Congo (Kinshasa)",
    "Congo": "Congo (Brazzaville)",
    "Dominican Rep.": "Dominican Republic",
    "Bosnia and Herz.": "Bosnia and Herzegovina",
    "Central African Rep.": "Central African Republic",
    "Côte d'Ivoire": "Ivory Coast",
    "S. Sudan": "South Sudan",
    "Taiwan": "Taiwan Province of China",
    "eSwatini": "Swaziland",
    "Antarctica": null
  };

  function dataName(neName){
    const raw = String(neName || "").trim();
    return Object.prototype.hasOwnProperty.call(ALIASES, raw) ? ALIASES[raw] : raw;
  }
  function colorScale(v){
    if (v==null || isNaN(v)) return 'rgba(120,120,120,0.10)';
    const x = Math.max(MIN, Math.min(MAX, v));
    const t = (x - MIN) / ((MAX - MIN) || 1);
    const r = t<0.5 ? 43 + 2*t*(255-43) : 255;
    const g = t<0.5 ? 108 + 2*t*(255-108) : 255 - 2*(t-0.5)*(255-210);
    const b = t<0.5 ? 255 : 255 - 2*(t-0.5)*(255-31);
    return `rgba(${r|0},${g|0},${b|0},0.45)`;
  }

  const root = document.getElementById('root');
  const globe = Globe({ rendererConfig: { antialias: true, alpha: true } })(root)
    .globeImageUrl('https://unpkg.com/three-globe/example/img/earth-blue-marble.jpg')
    .backgroundImageUrl('https://unpkg.com/three-globe/example/img/night-sky.png')
    .showAtmosphere(true)
    .atmosphereColor('#88ccff')
    .atmosphereAltitude(0.18)
    .width(root.clientWidth)
    .height(root.clientHeight);
  globe.controls().autoRotate = true;
  globe.controls().autoRotateSpeed = 0.4;

  fetch('https://raw.githubusercontent.com/nvkelso/natural-earth-vector/master/geojson/ne_110m_admin_0_countries.geojson')
    .then(r => r.json())
    .then(geo => {
      globe
        .polygonsData(geo.features)
        .polygonAltitude(0.005)
        .polygonSideColor(() => 'rgba(0,0,0,0)')
        .polygonStrokeColor(() => 'rgba(255,255,255,0.55)')
        .polygonCapColor(({properties}) => colorScale(VALUES[dataName(properties.NAME)]))
        .polygonLabel(({properties}) => {
          const name = String(properties.NAME || "");
          const v = VALUES[dataName(name)];
          return v == null ? name : `${name}: ${v.toFixed(2)}`;
        });
    });

  window.addEventListener('resize', () => { globe.width(root.clientWidth); globe.height(root.clientHeight); });
</script>
</body>
</html>
"""


def globe_chart_html(entries: Sequence[Entry]) -> str:
    payload = build_payload(entries)
    return (HTML.replace("__PAYLOAD__", json.dumps(payload).replace("</", "<\\/"))
                .replace("__UNIT__", payload["unit"])
                .replace("__MIN__", str(payload["clip"][0]))
                .replace("__MAX__", str(payload["clip"][1])))


def streamlit_globe_sink(entries: Sequence[Entry]) -> None:
    components.html(globe_chart_html(entries), height=CHART_HEIGHT, scrolling=False)


def render_happiness_chart(
    source: str,
    notify: Callable[[str], object],
    sink: Optional[Callable[[Sequence[Entry]], object]] = None,
    loader: Callable[[str], Any] = load_json_source,
) -> Optional[List[Entry]]:
    """Fetch the dataset, shape it and hand it to the chart sink.

    Any failure is reported through `notify` instead of propagating.
    """
    try:
        entries = parse_happiness(loader(source))
    except (BackendError, ValueError, OSError) as e:
        logger.warning("Happiness chart unavailable (%s): %s", source, e)
        notify(f"Could not load the happiness chart: {e}")
        return None
    logger.info("Rendering happiness chart for %d countries", len(entries))
    (sink or streamlit_globe_sink)(entries)
    return entries
