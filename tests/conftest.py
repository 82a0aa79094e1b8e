import numpy as np
import pytest

from pose_overlay.data.utils import NUM_KEYPOINTS
from pose_overlay.inference import ImageProcessorConfig
from pose_overlay.models import BasePoseEngine, EngineError, KeypointSet, PoseEngineResult


class FakeEngine(BasePoseEngine):
    """Engine returning a fixed result, with switches to make each stage fail."""

    def __init__(self, result=None):
        self.result = result if result is not None else PoseEngineResult()
        self.fail_initialize = False
        self.fail_process = False
        self.fail_finalize = False
        self.initialize_args = None
        self.process_calls = 0
        self.finalized = False

    def initialize(self, work_dir, num_threads):
        if self.fail_initialize:
            raise EngineError("cannot load model")
        self.initialize_args = (work_dir, num_threads)

    def process(self, image):
        self.process_calls += 1
        if self.fail_process:
            raise EngineError("inference failed")
        return self.result

    def finalize(self):
        if self.fail_finalize:
            raise EngineError("cannot release model")
        self.finalized = True


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start=0.0):
        self.now = start

    def advance(self, seconds):
        self.now += seconds

    def __call__(self):
        return self.now


def make_keypoint_set(scores=None):
    if scores is None:
        scores = [0.9] * NUM_KEYPOINTS
    coords = [(10.0 + 5 * i, 20.0 + 4 * i) for i in range(len(scores))]
    return KeypointSet(scores=list(scores), coords=coords)


@pytest.fixture
def keypoint_set():
    return make_keypoint_set()


@pytest.fixture
def pose_result(keypoint_set):
    return PoseEngineResult(
        bodies=[keypoint_set],
        pose_scores=[0.9],
        time_pre_process=1.5,
        time_inference=12.25,
        time_post_process=0.5
    )


@pytest.fixture
def fake_engine(pose_result):
    return FakeEngine(pose_result)


@pytest.fixture
def engine_factory(fake_engine):
    created = []

    def factory(engine_type):
        engine = fake_engine if not created else FakeEngine(fake_engine.result)
        created.append(engine)
        return engine

    factory.created = created
    return factory


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def config():
    return ImageProcessorConfig(work_dir='/tmp/work', num_threads=2, engine='fake')


@pytest.fixture
def frame():
    return np.zeros((120, 160, 3), dtype=np.uint8)


@pytest.fixture
def draw_calls(monkeypatch):
    """Record cv2.line and cv2.circle calls instead of drawing."""
    import cv2

    calls = {'line': [], 'circle': [], 'order': []}

    def fake_line(image, pt1, pt2, color, thickness):
        calls['line'].append((pt1, pt2, color, thickness))
        calls['order'].append('line')

    def fake_circle(image, center, radius, color, thickness):
        calls['circle'].append((center, radius, color, thickness))
        calls['order'].append('circle')

    monkeypatch.setattr(cv2, 'line', fake_line)
    monkeypatch.setattr(cv2, 'circle', fake_circle)
    return calls
