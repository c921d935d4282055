from __future__ import annotations

import folium

from portfolio_page.travel_map import DEFAULT_CENTER, MARKERS, TravelMarker, build_map, popup_html, render_travel_map


def test_popup_text_references_title():
    marker = TravelMarker((1.0, 2.0), "Kyoto & Nara", "https://example.com/i.png")
    assert popup_html(marker) == "<h3>Kyoto &amp; Nara</h3><p>I travelled to Kyoto &amp; Nara!</p>"


def test_build_map_places_fixed_markers():
    m = build_map()
    markers = [c for c in m._children.values() if isinstance(c, folium.Marker)]
    assert len(MARKERS) == 2
    assert [list(mk.location) for mk in markers] == [list(mk.location) for mk in MARKERS]
    assert list(m.location) == list(DEFAULT_CENTER)


def test_render_travel_map_hands_map_to_sink():
    drawn = []
    m = render_travel_map(sink=drawn.append)
    assert drawn == [m]
    html = m.get_root().render()
    for marker in MARKERS:
        assert f"I travelled to {marker.title}!" in html
        assert marker.icon_url in html
