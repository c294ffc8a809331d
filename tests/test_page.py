import pytest

from displayarrange.arrangement import Pan
from displayarrange.commands import (
    Resolution,
    RefreshRate,
    Scale,
    SetTransform,
    Toggle,
    cache_rates,
    randr_args,
)
from displayarrange.page import DIALOG_SECONDS, MirrorKind, Mirroring, Page
from displayarrange.randr import Mode, Output, OutputList, Transform


class Recorder:
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def __call__(self, args):
        self.calls.append(args)
        if self.error is not None:
            raise self.error
        return 0


def make_outputs(dp_scale=1.0, dp_transform=Transform.NORMAL, dp_mirroring=None):
    outputs = OutputList()
    m60 = outputs.add_mode(Mode((1920, 1080), 60000, True))
    m144 = outputs.add_mode(Mode((1920, 1080), 144000))
    m720 = outputs.add_mode(Mode((1280, 720), 60000))
    hdmi = outputs.add_output(
        Output("HDMI-1", modes=[m60, m720], current=m60, position=(1920, 0))
    )
    dp = outputs.add_output(
        Output(
            "DP-1",
            modes=[m60, m144, m720],
            current=m60,
            scale=dp_scale,
            transform=dp_transform,
            mirroring=dp_mirroring,
        )
    )
    return outputs, hdmi, dp


@pytest.fixture
def env():
    outputs, hdmi, dp = make_outputs()
    runner = Recorder()
    page = Page(runner)
    page.update_displays(outputs)
    return page, runner, outputs, hdmi, dp


def entity_for(page, key):
    return next(e for e in page.tabs.entities() if page.tabs.key_of(e) == key)


def test_tabs_sorted_and_first_active(env):
    page, _, _, hdmi, dp = env
    assert [page.tabs.key_of(e) for e in page.tabs.entities()] == [dp, hdmi]
    assert page.active_display == dp
    assert page.tabs.active_key() == dp


def test_mode_cache_of_active_display(env):
    page, *_ = env
    assert page.cache.resolutions == ["1920x1080", "1280x720"]
    assert page.cache.refresh_rates == cache_rates([60000, 144000])
    assert page.config.resolution == (1920, 1080)
    assert page.config.refresh_rate == 60000
    assert page.cache.resolution_selected == 0
    assert page.cache.refresh_rate_selected == 0


@pytest.mark.parametrize("scale,index", [(0.5, 0), (1.0, 2), (1.5, 4), (2.0, 6)])
def test_scale_selection(scale, index):
    outputs, _, _ = make_outputs(dp_scale=scale)
    page = Page(Recorder())
    page.update_displays(outputs)
    assert page.cache.scale_selected == index
    assert page.config.scale == int(scale * 100)


def test_active_tab_survives_reload(env):
    page, _, outputs, hdmi, _ = env
    page.set_display(entity_for(page, hdmi))
    page.update_displays(outputs)
    assert page.tabs.active_key() == hdmi


def test_mirror_menu_lists_other_outputs(env):
    page, _, _, hdmi, _ = env
    assert page.mirror_menu[0][0][1] == Mirroring.disable()
    assert [choice for _, choice in page.mirror_menu[1]] == [Mirroring.project(hdmi)]
    assert [choice for _, choice in page.mirror_menu[2]] == [Mirroring.mirror(hdmi)]
    assert page.mirror_selected == Mirroring.disable()
    assert page.show_display_options


def test_mirroring_state_from_list():
    outputs, hdmi, dp = make_outputs(dp_mirroring="HDMI-1")
    page = Page(Recorder())
    page.update_displays(outputs)
    assert page.mirror_map == {dp: hdmi}
    assert page.mirror_selected == Mirroring.mirror(hdmi)
    assert not page.show_display_options
    page.set_display(entity_for(page, hdmi))
    assert page.mirror_selected == Mirroring.project(dp)
    assert page.show_display_options


def test_set_scale_opens_dialog_and_cancel_reverts(env):
    page, runner, outputs, _, dp = env
    page.set_scale(3)
    assert runner.calls[-1] == randr_args(outputs, outputs.outputs[dp], Scale(125))
    assert page.dialog == Scale(100)
    assert page.dialog_countdown == DIALOG_SECONDS
    page.dialog_cancel()
    assert runner.calls[-1] == randr_args(outputs, outputs.outputs[dp], Scale(100))
    assert page.dialog is None
    assert page.dialog_countdown == 0


def test_same_scale_opens_no_dialog(env):
    page, runner, _, _, _ = env
    page.set_scale(2)
    assert len(runner.calls) == 1
    assert page.dialog is None


def test_undoing_change_completes_dialog(env):
    page, runner, _, _, _ = env
    page.set_scale(3)
    page.set_scale(2)
    assert len(runner.calls) == 2
    assert page.dialog is None


def test_countdown_reverts_when_spent(env):
    page, runner, _, _, _ = env
    page.set_scale(3)
    remaining = [page.dialog_tick() for _ in range(DIALOG_SECONDS)]
    assert remaining[-1] == 0
    assert page.dialog == Scale(100)
    assert len(runner.calls) == 1
    page.dialog_tick()
    assert page.dialog is None
    assert len(runner.calls) == 2


def test_dialog_complete_keeps_change(env):
    page, runner, _, _, _ = env
    page.set_scale(3)
    page.dialog_complete()
    assert page.dialog is None
    assert page.config.scale == 125
    assert len(runner.calls) == 1


def test_set_resolution(env):
    page, runner, _, _, _ = env
    page.set_resolution(1)
    assert runner.calls[-1] == ["mode", "DP-1", "1280", "720"]
    assert page.config.resolution == (1280, 720)
    assert page.config.refresh_rate == 60000
    assert page.cache.refresh_rates == cache_rates([60000])
    assert page.dialog == Resolution(1920, 1080)


def test_set_resolution_out_of_range(env):
    page, runner, _, _, _ = env
    page.set_resolution(5)
    assert runner.calls == []
    assert page.config.resolution == (1920, 1080)


def test_set_refresh_rate(env):
    page, runner, outputs, _, dp = env
    page.set_refresh_rate(1)
    assert runner.calls[-1] == randr_args(outputs, outputs.outputs[dp], RefreshRate(144000))
    assert page.config.refresh_rate == 144000
    assert page.cache.refresh_rate_selected == 1
    assert page.dialog is None
    page.set_refresh_rate(7)
    assert len(runner.calls) == 1


def test_set_orientation(env):
    page, runner, outputs, _, dp = env
    page.set_orientation(Transform.ROTATE90)
    assert page.cache.orientation_selected == 1
    assert page.dialog == SetTransform(Transform.NORMAL)
    assert runner.calls[-1] == randr_args(
        outputs, outputs.outputs[dp], SetTransform(Transform.ROTATE90)
    )


def test_orientation_revert_from_rotate180():
    outputs, _, _ = make_outputs(dp_transform=Transform.ROTATE180)
    page = Page(Recorder())
    page.update_displays(outputs)
    assert page.cache.orientation_selected == 2
    page.set_orientation(Transform.NORMAL)
    assert page.dialog == SetTransform(Transform.FLIPPED180)


def test_set_position(env):
    page, runner, outputs, hdmi, _ = env
    page.set_position(hdmi, -1920, 0)
    assert outputs.outputs[hdmi].position == (-1920, 0)
    assert runner.calls[-1][:5] == ["mode", "--pos-x", "-1920", "--pos-y", "0"]
    assert runner.calls[-1][5] == "HDMI-1"


def test_toggle_display(env):
    page, runner, outputs, _, dp = env
    page.toggle_display(False)
    assert not outputs.outputs[dp].enabled
    assert runner.calls[-1] == ["disable", "DP-1"]
    assert page.dialog == Toggle(True)


def test_mirroring_actions(env):
    page, runner, _, hdmi, _ = env
    page.set_mirroring(Mirroring.mirror(hdmi))
    assert runner.calls[-1] == ["mirror", "DP-1", "HDMI-1"]
    page.set_mirroring(Mirroring.project(hdmi))
    assert runner.calls[-1] == ["mirror", "HDMI-1", "DP-1"]
    page.set_mirroring(Mirroring(MirrorKind.DISABLE))
    assert runner.calls[-1] == ["enable", "DP-1"]
    assert page.dialog is None


def test_pan_clamps(env):
    page, *_ = env
    assert page.pan(Pan.RIGHT) == pytest.approx(0.51)
    for _ in range(100):
        page.pan(Pan.RIGHT)
    assert page.last_pan == 1.0
    for _ in range(200):
        page.pan(Pan.LEFT)
    assert page.last_pan == 0.0


def test_no_active_display_does_nothing():
    runner = Recorder()
    page = Page(runner)
    page.set_scale(3)
    page.toggle_display(False)
    page.set_orientation(Transform.ROTATE90)
    assert runner.calls == []
    assert page.dialog is None


def test_runner_failure_is_contained():
    outputs, _, _ = make_outputs()
    runner = Recorder(error=FileNotFoundError("missing"))
    page = Page(runner)
    page.update_displays(outputs)
    page.set_scale(3)
    assert len(runner.calls) == 1
    assert page.dialog == Scale(100)