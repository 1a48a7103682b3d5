import pytest

import track
from camshift_tracker.capture import FrameSource, FrameSourceError


def test_parser_defaults():
    args = track.build_parser().parse_args([])
    assert args.video is None
    cfg = track.config_from_args(args)
    assert cfg.hist_bins == 16
    assert cfg.max_iter == 10
    assert cfg.epsilon == 1.0
    assert cfg.output_dir is None
    assert not cfg.show_backprojection


def test_parser_options():
    args = track.build_parser().parse_args(['clip.mp4', '--save-dir', 'out', '--bins', '32',
                                            '--max-iter', '5', '--epsilon', '0.5',
                                            '--show-backprojection'])
    cfg = track.config_from_args(args)
    assert args.video == 'clip.mp4'
    assert (cfg.hist_bins, cfg.max_iter, cfg.epsilon) == (32, 5, 0.5)
    assert cfg.output_dir == 'out'
    assert cfg.show_backprojection


def test_invalid_option_is_usage_error():
    with pytest.raises(SystemExit) as exc:
        track.main(['--bins', '0'])
    assert exc.value.code == 2


def test_missing_video_exits_with_error(tmp_path, capsys):
    assert track.main([str(tmp_path / 'missing.avi')]) == 1
    assert 'Could not open' in capsys.readouterr().err


def test_frame_source_open_failure(tmp_path):
    source = FrameSource(str(tmp_path / 'missing.avi'))
    with pytest.raises(FrameSourceError):
        source.open()
    assert source.read() is None
    source.release()
