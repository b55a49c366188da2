import unittest

from playfield import Playfield
from evaluation import (
    MAX_LANDING_ANGLE,
    MAX_LANDING_SPEED,
    ScoreWeights,
    judge_touchdown,
    landing_score,
)


class TestEvaluation(unittest.TestCase):
    def test_perfect_touchdown_score(self):
        # 1000 + floor(50*10) + floor(1.5*100) + floor(15*5)
        self.assertEqual(landing_score(50.0, 0.0, 0.0), 1725)

    def test_score_at_tolerance_limits(self):
        self.assertEqual(landing_score(0.0, MAX_LANDING_SPEED, MAX_LANDING_ANGLE), 1000)
        self.assertEqual(landing_score(0.0, MAX_LANDING_SPEED, -MAX_LANDING_ANGLE), 1000)

    def test_bonus_terms_are_floored(self):
        # fuel 12.34 -> 123, speed 0.555 -> floor(94.5) = 94, angle 2.5 -> floor(62.5) = 62
        self.assertEqual(landing_score(12.34, 0.555, 2.5), 1000 + 123 + 94 + 62)

    def test_gentler_scores_higher(self):
        self.assertGreater(landing_score(40.0, 0.2, 0.0), landing_score(40.0, 1.2, 0.0))
        self.assertGreater(landing_score(40.0, 0.2, 0.0), landing_score(40.0, 0.2, 12.0))

    def test_custom_weights(self):
        w = ScoreWeights(base=0, fuel=1.0, speed=0.0, angle=0.0)
        self.assertEqual(landing_score(42.9, 0.0, 0.0, w), 42)

    def test_judge_touchdown(self):
        p = Playfield()
        ok = judge_touchdown(50.0, 0.0, -0.5, 0.0, p)
        self.assertTrue(ok.landed)
        self.assertAlmostEqual(ok.speed, 0.5)

        off_pad = judge_touchdown(20.0, 0.0, -0.5, 0.0, p)
        self.assertFalse(off_pad.on_pad)
        self.assertFalse(off_pad.landed)

        fast = judge_touchdown(50.0, 1.2, -1.6, 0.0, p)  # speed 2.0
        self.assertFalse(fast.soft)
        self.assertFalse(fast.landed)
        self.assertAlmostEqual(fast.speed, 2.0)

        tilted = judge_touchdown(50.0, 0.0, 0.0, 30.0, p)
        self.assertTrue(tilted.soft)
        self.assertFalse(tilted.level)
        self.assertFalse(tilted.landed)

    def test_tolerances_are_inclusive(self):
        t = judge_touchdown(40.0, 0.0, -MAX_LANDING_SPEED, -MAX_LANDING_ANGLE, Playfield())
        self.assertTrue(t.landed)


if __name__ == "__main__":
    unittest.main()
