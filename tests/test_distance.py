import pytest

from explorafit.routes.distance import compute_length, haversine_m

def test_empty_and_single_point_are_zero():
    assert compute_length([]) == 0
    assert compute_length([(45.0, 4.8)]) == 0

def test_one_degree_of_longitude_at_equator():
    assert compute_length([(0, 0), (0, 1)]) == pytest.approx(111.19, abs=0.005)

def test_accepts_lat_lng_mappings():
    pts = [{"lat": 0, "lng": 0}, {"lat": 0, "lng": 1}]
    assert compute_length(pts) == compute_length([(0, 0), (0, 1)])

def test_sums_consecutive_legs():
    out_and_back = [(0, 0), (0, 1), (0, 0)]
    assert compute_length(out_and_back) == pytest.approx(222.39, abs=0.01)

def test_rounded_to_two_decimals():
    km = compute_length([(45.764, 4.8357), (45.7597, 4.8422), (45.7485, 4.8467)])
    assert km == round(km, 2)

def test_haversine_is_symmetric_and_zero_on_same_point():
    a, b = (48.8566, 2.3522), (51.5074, -0.1278)
    assert haversine_m(a, a) == 0
    assert haversine_m(a, b) == pytest.approx(haversine_m(b, a))
    # Paris-London, roughly 344 km
    assert 340_000 < haversine_m(a, b) < 347_000
