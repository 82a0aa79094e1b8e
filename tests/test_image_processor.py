import json

import numpy as np
import pytest

from pose_overlay.inference import (
    AlreadyInitialized, EngineFinalizeFailed, EngineInitFailed, EngineProcessFailed,
    FpsTracker, ImageProcessor, ImageProcessorConfig, ImageProcessorError, NotInitialized,
    RealtimePoseDetector, UnsupportedCommand, load_config
)
from pose_overlay.models import KeypointSet, PoseEngineResult


@pytest.fixture
def processor(engine_factory, clock):
    return ImageProcessor(engine_factory=engine_factory, fps_tracker=FpsTracker(clock=clock))


@pytest.fixture
def ready_processor(processor, config):
    processor.initialize(config)
    return processor


def test_initialize_passes_work_dir_and_threads(processor, config, fake_engine):
    processor.initialize(config)

    assert processor.is_initialized
    assert fake_engine.initialize_args == ('/tmp/work', 2)


def test_initialize_twice_keeps_first_engine(ready_processor, config, fake_engine, engine_factory):
    with pytest.raises(AlreadyInitialized):
        ready_processor.initialize(config)

    assert ready_processor.engine is fake_engine
    assert not fake_engine.finalized
    assert len(engine_factory.created) == 1


def test_engine_init_failure_leaves_processor_uninitialized(processor, config, fake_engine):
    fake_engine.fail_initialize = True

    with pytest.raises(EngineInitFailed):
        processor.initialize(config)

    assert not processor.is_initialized
    with pytest.raises(NotInitialized):
        processor.process(np.zeros((10, 10, 3), np.uint8))


def test_unknown_engine_name_fails_initialize():
    processor = ImageProcessor()

    with pytest.raises(EngineInitFailed) as exc_info:
        processor.initialize(ImageProcessorConfig(engine='tflite'))

    assert isinstance(exc_info.value, ImageProcessorError)
    assert isinstance(exc_info.value.__cause__, ValueError)
    assert not processor.is_initialized


def test_process_before_initialize_draws_nothing(processor, frame, fake_engine):
    original = frame.copy()

    with pytest.raises(NotInitialized):
        processor.process(frame)

    assert np.array_equal(frame, original)
    assert fake_engine.process_calls == 0


def test_process_draws_and_returns_timings(ready_processor, frame):
    original = frame.copy()

    result = ready_processor.process(frame)

    assert result.image is frame
    assert not np.array_equal(frame, original)
    assert result.time_pre_process == 1.5
    assert result.time_inference == 12.25
    assert result.time_post_process == 0.5
    assert result.fps == 0.0


def test_second_frame_fps_from_clock(ready_processor, frame, clock):
    ready_processor.process(frame)
    clock.advance(0.1)

    result = ready_processor.process(frame)

    assert result.fps == pytest.approx(10.0)


def test_process_uses_only_first_body(ready_processor, frame, fake_engine, draw_calls, keypoint_set):
    second = KeypointSet(
        scores=list(keypoint_set.scores),
        coords=[(x + 1, y + 1) for x, y in keypoint_set.coords]
    )
    fake_engine.result.bodies.append(second)

    ready_processor.process(frame)

    centers = [center for center, _, _, _ in draw_calls['circle']]
    assert centers == [(int(x), int(y)) for x, y in keypoint_set.coords]


def test_process_without_bodies_still_draws_readout(ready_processor, frame, fake_engine, draw_calls):
    fake_engine.result = PoseEngineResult(time_inference=3.0)
    original = frame.copy()

    result = ready_processor.process(frame)

    assert draw_calls['order'] == []
    assert not np.array_equal(frame, original)
    assert result.time_inference == 3.0


def test_process_applies_config_threshold(processor, frame, draw_calls, fake_engine):
    processor.initialize(ImageProcessorConfig(engine='fake', score_threshold=0.95))

    processor.process(frame)

    assert draw_calls['order'] == []


def test_engine_process_failure_keeps_processor_ready(ready_processor, frame, fake_engine):
    fake_engine.fail_process = True
    original = frame.copy()

    with pytest.raises(EngineProcessFailed):
        ready_processor.process(frame)

    assert ready_processor.is_initialized
    assert np.array_equal(frame, original)

    fake_engine.fail_process = False
    ready_processor.process(frame)
    assert fake_engine.process_calls == 2


def test_finalize_releases_engine(ready_processor, fake_engine):
    ready_processor.finalize()

    assert fake_engine.finalized
    assert not ready_processor.is_initialized
    with pytest.raises(NotInitialized):
        ready_processor.finalize()


def test_finalize_failure_still_drops_engine(ready_processor, fake_engine):
    fake_engine.fail_finalize = True

    with pytest.raises(EngineFinalizeFailed):
        ready_processor.finalize()

    assert not ready_processor.is_initialized


def test_reinitialize_after_finalize(ready_processor, config, engine_factory):
    ready_processor.finalize()
    ready_processor.initialize(config)

    assert ready_processor.is_initialized
    assert len(engine_factory.created) == 2


def test_command_is_unsupported(processor, config):
    with pytest.raises(NotInitialized):
        processor.command(0)

    processor.initialize(config)
    for cmd in (0, 1, -1):
        with pytest.raises(UnsupportedCommand):
            processor.command(cmd)


def test_context_manager_finalizes(processor, config, fake_engine):
    with processor:
        processor.initialize(config)

    assert fake_engine.finalized
    assert not processor.is_initialized


def test_load_config(tmp_path):
    path = tmp_path / 'config.json'
    path.write_text(json.dumps({
        'work_dir': 'resource',
        'num_threads': 8,
        'engine': 'mediapipe',
        'score_threshold': 0.3,
        'point_color': [255, 0, 0],
        'fps_pos': [10, 20]
    }))

    config = load_config(str(path))

    assert config.work_dir == 'resource'
    assert config.num_threads == 8
    assert config.engine == 'mediapipe'
    assert config.score_threshold == 0.3
    assert config.point_color == (255, 0, 0)
    assert config.fps_pos == (10, 20)
    assert config.line_color == (200, 200, 200)


def test_load_config_rejects_unknown_keys(tmp_path):
    path = tmp_path / 'config.json'
    path.write_text(json.dumps({'threshold': 0.3}))

    with pytest.raises(ValueError):
        load_config(str(path))


def test_realtime_detector_collects_stats(ready_processor, frame, clock):
    detector = RealtimePoseDetector(ready_processor)

    assert detector.process_frame(frame)
    clock.advance(0.05)
    assert detector.process_frame(frame)

    stats = detector.get_performance_stats()
    assert stats['fps'] == pytest.approx(20.0)
    assert stats['avg_inference_time'] == pytest.approx(12.25)
    assert stats['avg_pre_process_time'] == pytest.approx(1.5)


def test_realtime_detector_skips_failed_frames(ready_processor, frame, fake_engine):
    detector = RealtimePoseDetector(ready_processor)
    fake_engine.fail_process = True

    assert not detector.process_frame(frame)
    assert detector.get_performance_stats() == {'fps': 0.0}
