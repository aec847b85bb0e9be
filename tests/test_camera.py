"""Tests for camera backends and the factory."""

from pathlib import Path

import cv2
import numpy as np
import pytest

from intake_vision.camera.factory import create_camera
from intake_vision.camera.image_file import ImageFileCamera
from intake_vision.camera.usb import USBCamera
from intake_vision.config import CameraConfig
from intake_vision.exceptions import CameraConnectionError, CameraError


def _write_image(tmp_path: Path, width: int = 64, height: int = 48) -> Path:
    path = tmp_path / "still.png"
    image = np.zeros((height, width, 3), dtype=np.uint8)
    image[:, : width // 2] = (0, 255, 0)
    cv2.imwrite(str(path), image)
    return path


class TestCameraFactory:
    def test_create_usb_camera(self):
        config = CameraConfig(type="usb", device_index=1, width=320, height=240)
        camera = create_camera(config)
        assert isinstance(camera, USBCamera)
        assert camera.source_id == "usb:1"
        assert camera.is_open() is False

    def test_create_file_camera(self, tmp_path: Path):
        config = CameraConfig(id="bench", type="file", path=str(tmp_path / "a.png"))
        camera = create_camera(config)
        assert isinstance(camera, ImageFileCamera)
        assert camera.source_id == "bench"

    def test_path_implies_file_camera(self, tmp_path: Path):
        config = CameraConfig(path=str(tmp_path / "a.png"))
        camera = create_camera(config)
        assert isinstance(camera, ImageFileCamera)
        assert camera.source_id == "file:0"

    def test_file_without_path_raises(self):
        with pytest.raises(CameraConnectionError, match="path is required"):
            create_camera(CameraConfig(type="file"))

    def test_unknown_type_raises(self):
        with pytest.raises(ValueError, match="Unknown camera type"):
            create_camera(CameraConfig(type="webcam9000"))


class TestImageFileCamera:
    @pytest.mark.asyncio
    async def test_open_and_grab(self, tmp_path: Path):
        camera = ImageFileCamera(_write_image(tmp_path))
        await camera.open()
        assert camera.is_open()
        first = await camera.grab_frame()
        second = await camera.grab_frame()
        assert first.resolution == (64, 48)
        assert first.image.shape == (48, 64, 3)
        assert (first.sequence_number, second.sequence_number) == (1, 2)
        assert np.array_equal(first.image, second.image)

    @pytest.mark.asyncio
    async def test_frames_are_independent_copies(self, tmp_path: Path):
        camera = ImageFileCamera(_write_image(tmp_path))
        await camera.open()
        first = await camera.grab_frame()
        first.image[:] = 0
        second = await camera.grab_frame()
        assert second.image.any()

    @pytest.mark.asyncio
    async def test_resizes_to_configured_size(self, tmp_path: Path):
        camera = ImageFileCamera(_write_image(tmp_path), width=32, height=24)
        await camera.open()
        frame = await camera.grab_frame()
        assert frame.resolution == (32, 24)

    @pytest.mark.asyncio
    async def test_missing_file_raises(self, tmp_path: Path):
        camera = ImageFileCamera(tmp_path / "missing.png")
        with pytest.raises(CameraConnectionError, match="Cannot read image"):
            await camera.open()

    @pytest.mark.asyncio
    async def test_grab_before_open_raises(self, tmp_path: Path):
        camera = ImageFileCamera(_write_image(tmp_path))
        with pytest.raises(CameraError, match="not open"):
            await camera.grab_frame()

    @pytest.mark.asyncio
    async def test_close(self, tmp_path: Path):
        camera = ImageFileCamera(_write_image(tmp_path))
        await camera.open()
        await camera.close()
        assert camera.is_open() is False


class _FakeCapture:
    """Stand-in for ``cv2.VideoCapture`` driven by a scripted ``read()``."""

    def __init__(self, opened=True, image=None):
        self.opened = opened
        self.image = image
        self.released = False

    def set(self, prop, value):
        return False

    def isOpened(self):
        return self.opened and not self.released

    def read(self):
        if self.image is None:
            return False, None
        return True, self.image.copy()

    def release(self):
        self.released = True


def _install_capture(monkeypatch, **kwargs) -> list[_FakeCapture]:
    created: list[_FakeCapture] = []

    def factory(index):
        cap = _FakeCapture(**kwargs)
        created.append(cap)
        return cap

    monkeypatch.setattr("intake_vision.camera.usb.cv2.VideoCapture", factory)
    return created


class TestUSBCamera:
    @pytest.mark.asyncio
    async def test_grab_without_frames_raises(self):
        camera = USBCamera(device_index=0)
        with pytest.raises(CameraError, match="No frame available"):
            await camera.grab_frame()

    @pytest.mark.asyncio
    async def test_open_failure_releases_device(self, monkeypatch):
        created = _install_capture(monkeypatch, opened=False)
        camera = USBCamera(device_index=7)
        with pytest.raises(CameraConnectionError, match="index 7"):
            await camera.open()
        assert created[0].released is True
        assert camera.is_open() is False

    @pytest.mark.asyncio
    async def test_no_first_frame_releases_device(self, monkeypatch):
        created = _install_capture(monkeypatch, image=None)
        camera = USBCamera(device_index=2, first_frame_timeout=0.05)
        with pytest.raises(CameraConnectionError, match="no frame"):
            await camera.open()
        assert created[0].released is True
        assert camera._thread is None
        assert camera.is_open() is False

    @pytest.mark.asyncio
    async def test_frames_resized_to_configured_size(self, monkeypatch):
        image = np.zeros((48, 64, 3), dtype=np.uint8)
        created = _install_capture(monkeypatch, image=image)
        camera = USBCamera(device_index=0, width=32, height=24)
        await camera.open()
        try:
            frame = await camera.grab_frame()
            assert frame.resolution == (32, 24)
            assert frame.image.shape == (24, 32, 3)
            assert frame.source_id == "usb:0"
        finally:
            await camera.close()
        assert created[0].released is True

    @pytest.mark.asyncio
    async def test_close_clears_latest_frame(self, monkeypatch):
        _install_capture(monkeypatch, image=np.zeros((24, 32, 3), dtype=np.uint8))
        camera = USBCamera(device_index=0, width=32, height=24)
        await camera.open()
        await camera.close()
        with pytest.raises(CameraError, match="No frame available"):
            await camera.grab_frame()
