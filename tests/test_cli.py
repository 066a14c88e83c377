import cv2
import numpy as np
import pytest

from fastmatch.main import EXIT_ERROR, EXIT_FOUND, EXIT_NOT_FOUND, build_parser, main


@pytest.fixture
def images(tmp_path, noise_scene):
    scene = tmp_path / "scene.png"
    tpl = tmp_path / "tpl.png"
    other = tmp_path / "other.png"
    cv2.imwrite(str(scene), noise_scene)
    cv2.imwrite(str(tpl), noise_scene[40:60, 30:50])
    cv2.imwrite(str(other), np.random.default_rng(3).integers(0, 256, size=(20, 20), dtype=np.uint8))
    return {"scene": str(scene), "tpl": str(tpl), "other": str(other), "config": str(tmp_path / "config.ini")}


def _run(images, *extra):
    return main([*extra, "--config", images["config"], "--no-log-file"])


def test_found_prints_point(images, capsys):
    code = _run(images, images["tpl"], "--scene", images["scene"])
    assert code == EXIT_FOUND
    out = capsys.readouterr().out
    assert out.startswith("30,40 score=")


def test_not_found(images, capsys):
    code = _run(images, images["other"], "--scene", images["scene"])
    assert code == EXIT_NOT_FOUND
    assert "not found (track_lost" in capsys.readouterr().out


def test_options_override_config(images, capsys):
    code = _run(
        images, images["tpl"], "--scene", images["scene"],
        "--method", "sqdiff_normed", "--weak", "-0.1", "--strict", "-0.01", "--max-level", "1",
    )
    assert code == EXIT_FOUND
    assert capsys.readouterr().out.startswith("30,40")


def test_level_zero_refusal_and_opt_in(images, capsys):
    assert _run(images, images["tpl"], "--scene", images["scene"], "--max-level", "0") == EXIT_NOT_FOUND
    assert "refused" in capsys.readouterr().out
    code = _run(images, images["tpl"], "--scene", images["scene"], "--max-level", "0", "--allow-level-zero")
    assert code == EXIT_FOUND


def test_missing_template_is_error(images, tmp_path, capsys):
    code = _run(images, str(tmp_path / "missing.png"), "--scene", images["scene"])
    assert code == EXIT_ERROR
    assert "not found" in capsys.readouterr().err.lower()


def test_bad_method_is_error(images):
    assert _run(images, images["tpl"], "--scene", images["scene"], "--method", "bogus") == EXIT_ERROR


def test_bad_level_rejected_by_parser(images):
    with pytest.raises(SystemExit) as exc:
        _run(images, images["tpl"], "--scene", images["scene"], "--max-level", "deep")
    assert exc.value.code == 2


def test_session_logging(images, tmp_path, restore_root_logger, capsys):
    code = main([images["tpl"], "--scene", images["scene"], "--config", images["config"], "--log-level", "DEBUG"])
    assert code == EXIT_FOUND
    sessions = list((tmp_path / "logs").glob("session-*"))
    assert len(sessions) == 1
    assert (sessions[0] / "fastmatch.log").exists()


def test_color_flag_matches_bgr(images, capsys):
    assert build_parser().parse_args([images["tpl"]]).color is False
    code = _run(images, images["tpl"], "--scene", images["scene"], "--color")
    assert code == EXIT_FOUND
    assert capsys.readouterr().out.startswith("30,40")
