import logging

import pygame

from lighthouse.display.geometry import ImageFormat, Offset
from lighthouse.display.images import draw_image


def test_missing_image_draws_nothing(canvas, tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger="lighthouse"):
        result = draw_image(canvas, str(tmp_path / "nope.png"), Offset(5, 12, 0), 100, 100)
    assert result == ImageFormat(0, 0)
    assert canvas.ops == []
    assert "Cannot open image file" in caplog.text


def test_small_image_is_drawn_at_image_top(canvas, write_png):
    path = write_png("icon.png", (20, 10))
    result = draw_image(canvas, str(path), Offset(x=7, y=42, image_y=30), 100, 100)
    assert result == ImageFormat(20, 10)
    assert canvas.ops == [("blit", (20, 10), 7, 30)]


def test_large_image_is_shrunk_keeping_aspect(canvas, write_png):
    path = write_png("big.png", (400, 200))
    result = draw_image(canvas, str(path), Offset(0, 0, 0), 80, 60)
    assert result == ImageFormat(80, 40)
    assert canvas.ops == [("blit", (80, 40), 0, 0)]


def test_home_directory_is_expanded(canvas, write_png, monkeypatch, tmp_path):
    write_png("home.png", (8, 8))
    monkeypatch.setenv("HOME", str(tmp_path))
    result = draw_image(canvas, "~/home.png", Offset(0, 0, 0), 50, 50)
    assert result == ImageFormat(8, 8)


def test_unbalanced_quote_falls_back_to_literal_path(canvas, tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger="lighthouse"):
        result = draw_image(canvas, str(tmp_path / "it's.png"), Offset(0, 0, 0), 50, 50)
    assert result == ImageFormat(0, 0)
    assert "Error expanding file" in caplog.text


def test_undecodable_image_draws_nothing(canvas, tmp_path, monkeypatch):
    path = tmp_path / "broken.png"
    path.write_bytes(b"not-an-image")

    def _raise(*_args, **_kwargs):
        raise pygame.error("bad image")

    monkeypatch.setattr(pygame.image, "load", _raise)
    assert draw_image(canvas, str(path), Offset(0, 0, 0), 50, 50) == ImageFormat(0, 0)
    assert canvas.ops == []


def test_no_room_draws_nothing(canvas, write_png):
    path = write_png("icon.png", (8, 8))
    assert draw_image(canvas, str(path), Offset(0, 0, 0), 0, 50) == ImageFormat(0, 0)
    assert canvas.ops == []


def test_scaled_image_is_cached(canvas, write_png, monkeypatch):
    path = write_png("big.png", (400, 200))
    draw_image(canvas, str(path), Offset(0, 0, 0), 80, 60)

    def _raise(*_args, **_kwargs):
        raise AssertionError("image decoded twice")

    monkeypatch.setattr(pygame.image, "load", _raise)
    assert draw_image(canvas, str(path), Offset(0, 0, 0), 80, 60) == ImageFormat(80, 40)
