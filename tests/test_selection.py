from camshift_tracker.utils import ROISelector, SelectorState, derive_roi_box


def test_derive_box_from_axis_aligned_clicks():
    box = derive_roi_box([(10, 10), (10, 50), (50, 10), (50, 50)])
    assert box == (10, 10, 40, 40)


def test_derive_box_independent_of_click_order():
    assert derive_roi_box([(50, 50), (10, 50), (50, 10), (10, 10)]) == (10, 10, 40, 40)
    assert derive_roi_box([(30, 80), (90, 20), (90, 80), (30, 20)]) == (30, 20, 60, 60)


def test_derive_box_uses_coordinate_sum_extremes():
    # Skewed quadrilateral: corners come from the min/max x+y points only
    box = derive_roi_box([(20, 10), (70, 15), (15, 60), (80, 70)])
    assert box == (20, 10, 60, 60)


def test_derive_box_rejects_zero_area():
    assert derive_roi_box([(10, 10), (20, 10), (30, 10), (40, 10)]) is None
    assert derive_roi_box([(5, 5)] * 4) is None
    assert derive_roi_box([]) is None


def test_selector_starts_idle_and_ignores_clicks():
    sel = ROISelector()
    assert sel.state is SelectorState.IDLE
    assert sel.add_point(1, 1) is False
    assert sel.points == []


def test_four_clicks_complete_selection_and_fifth_is_ignored():
    sel = ROISelector()
    sel.begin()
    assert sel.state is SelectorState.SELECTING

    for i, (x, y) in enumerate([(10, 10), (50, 10), (10, 50)]):
        assert sel.add_point(x, y)
        assert sel.selecting
        assert len(sel.points) == i + 1

    assert sel.add_point(50, 50)
    assert sel.state is SelectorState.IDLE
    assert sel.box == (10, 10, 40, 40)
    assert sel.points == []

    assert sel.add_point(100, 100) is False
    assert sel.box == (10, 10, 40, 40)


def test_degenerate_selection_stays_selecting():
    sel = ROISelector()
    sel.begin()
    for x in (10, 20, 30, 40):
        sel.add_point(x, 10)
    assert sel.selecting
    assert sel.box is None
    assert sel.points == []

    for p in [(10, 10), (60, 10), (10, 30), (60, 30)]:
        sel.add_point(*p)
    assert sel.state is SelectorState.IDLE
    assert sel.box == (10, 10, 50, 20)


def test_begin_resets_previous_selection():
    sel = ROISelector()
    sel.begin()
    for p in [(0, 0), (10, 0), (0, 10), (10, 10)]:
        sel.add_point(*p)
    assert sel.box is not None

    sel.begin()
    assert sel.box is None
    assert sel.points == []
    assert sel.selecting


def test_cancel_returns_to_idle_without_box():
    sel = ROISelector()
    sel.begin()
    sel.add_point(3, 4)
    sel.cancel()
    assert sel.state is SelectorState.IDLE
    assert sel.points == []
    assert sel.box is None
