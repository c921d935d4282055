from __future__ import annotations
import html
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

import folium

logger = logging.getLogger(__name__)

DEFAULT_CENTER: Tuple[float, float] = (39.5, -98.35)
DEFAULT_ZOOM = 4
ICON_SIZE = (32, 32)
POPUP_TEMPLATE = "<h3>{title}</h3><p>I travelled to {title}!</p>"


@dataclass(frozen=True)
class TravelMarker:
    location: Tuple[float, float]
    title: str
    icon_url: str


MARKERS: Tuple[TravelMarker, ...] = (
    TravelMarker((37.8199, -122.4783), "Golden Gate Bridge",
                 "https://maps.google.com/mapfiles/kml/shapes/camera.png"),
    TravelMarker((40.6892, -74.0445), "Statue of Liberty",
                 "https://maps.google.com/mapfiles/kml/shapes/flag.png"),
)


def popup_html(marker: TravelMarker) -> str:
    return POPUP_TEMPLATE.format(title=html.escape(marker.title))


def build_map(markers: Sequence[TravelMarker] = MARKERS,
              center: Tuple[float, float] = DEFAULT_CENTER,
              zoom_start: int = DEFAULT_ZOOM) -> folium.Map:
    m = folium.Map(location=list(center), zoom_start=zoom_start, tiles="OpenStreetMap", control_scale=True)
    for marker in markers:
        # a CustomIcon belongs to exactly one marker
        icon = folium.CustomIcon(icon_image=marker.icon_url, icon_size=ICON_SIZE)
        folium.Marker(
            location=list(marker.location),
            tooltip=marker.title,
            popup=folium.Popup(popup_html(marker), max_width=300),
            icon=icon,
        ).add_to(m)
    return m


def st_folium_sink(m: folium.Map) -> None:
    from streamlit_folium import st_folium

    st_folium(m, height=450, use_container_width=True, returned_objects=[], key="travel_map")


def render_travel_map(sink: Optional[Callable[[folium.Map], object]] = None,
                      markers: Sequence[TravelMarker] = MARKERS) -> folium.Map:
    m = build_map(markers)
    logger.debug("Rendering travel map with %d marker(s)", len(markers))
    (sink or st_folium_sink)(m)
    return m
