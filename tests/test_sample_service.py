import threading
import time
import unittest
from datetime import datetime, timezone

from beam_coach.config import Config
from beam_coach.models.errors import SensorUnavailable
from beam_coach.services.sample_service import (
    SensorSampleGenerator,
    SimulatedSampleGenerator,
    create_generator,
)

NOW = datetime(2026, 3, 11, 9, 30, tzinfo=timezone.utc)


class SimulatedSampleGeneratorTest(unittest.TestCase):
    def test_sample_fields(self):
        sample = SimulatedSampleGenerator(seed=1).generate_sample("Bicep Curls", NOW)
        self.assertEqual(sample.timestamp, NOW)
        self.assertEqual(sample.exercise_label, "Bicep Curls")
        self.assertIsInstance(sample.left_side, float)
        self.assertIsInstance(sample.right_side, float)

    def test_readings_stay_within_bounds(self):
        generator = SimulatedSampleGenerator(low=40, high=60, seed=7)
        for _ in range(200):
            sample = generator.generate_sample("Bicep Curls", NOW)
            self.assertTrue(40 <= sample.left_side <= 60)
            self.assertTrue(40 <= sample.right_side <= 60)

    def test_same_seed_gives_same_stream(self):
        a = SimulatedSampleGenerator(seed=42)
        b = SimulatedSampleGenerator(seed=42)
        for _ in range(10):
            self.assertEqual(a.generate_sample("x", NOW), b.generate_sample("x", NOW))

    def test_sides_are_drawn_independently(self):
        generator = SimulatedSampleGenerator(seed=3)
        samples = [generator.generate_sample("x", NOW) for _ in range(20)]
        self.assertTrue(any(s.left_side != s.right_side for s in samples))

    def test_inverted_bounds_are_rejected(self):
        with self.assertRaises(ValueError):
            SimulatedSampleGenerator(low=60, high=40)


class SensorSampleGeneratorTest(unittest.TestCase):
    def test_pushed_reading_is_returned(self):
        generator = SensorSampleGenerator(timeout=0.5)
        generator.push(48, 52)
        sample = generator.generate_sample("Tricep Extensions", NOW)
        self.assertEqual((sample.left_side, sample.right_side), (48.0, 52.0))
        self.assertEqual(sample.timestamp, NOW)

    def test_readings_are_consumed_in_order(self):
        generator = SensorSampleGenerator(timeout=0.5)
        generator.push(41, 59)
        generator.push(50, 50)
        first = generator.generate_sample("x", NOW)
        second = generator.generate_sample("x", NOW)
        self.assertEqual(first.left_side, 41.0)
        self.assertEqual(second.left_side, 50.0)

    def test_timeout_raises_sensor_unavailable(self):
        generator = SensorSampleGenerator(timeout=0.05)
        started = time.monotonic()
        with self.assertRaises(SensorUnavailable):
            generator.generate_sample("x", NOW)
        self.assertLess(time.monotonic() - started, 2.0)

    def test_cancel_wakes_a_blocked_wait(self):
        generator = SensorSampleGenerator(timeout=5.0)
        errors = []

        def wait():
            try:
                generator.generate_sample("x", NOW)
            except SensorUnavailable as e:
                errors.append(e)

        waiter = threading.Thread(target=wait)
        waiter.start()
        time.sleep(0.05)
        generator.cancel()
        waiter.join(timeout=2.0)

        self.assertFalse(waiter.is_alive())
        self.assertEqual(len(errors), 1)

    def test_cancelled_generator_fails_immediately(self):
        generator = SensorSampleGenerator(timeout=5.0)
        generator.push(50, 50)
        generator.cancel()
        self.assertTrue(generator.cancelled)
        with self.assertRaises(SensorUnavailable):
            generator.generate_sample("x", NOW)

    def test_resume_keeps_pending_readings(self):
        generator = SensorSampleGenerator(timeout=0.5)
        generator.push(45, 55)
        generator.cancel()
        generator.resume()
        sample = generator.generate_sample("x", NOW)
        self.assertEqual(sample.left_side, 45.0)


class CreateGeneratorTest(unittest.TestCase):
    def test_simulated_source(self):
        cfg = Config()
        cfg.sample_source = "simulated"
        self.assertIsInstance(create_generator(cfg), SimulatedSampleGenerator)

    def test_seeded_source_is_deterministic(self):
        cfg = Config()
        cfg.sample_source = "seeded"
        cfg.sample_seed = 11
        a = create_generator(cfg).generate_sample("x", NOW)
        b = create_generator(cfg).generate_sample("x", NOW)
        self.assertEqual(a, b)

    def test_sensor_source(self):
        cfg = Config()
        cfg.sample_source = "sensor"
        cfg.sensor_timeout = 0.25
        generator = create_generator(cfg)
        self.assertIsInstance(generator, SensorSampleGenerator)
        self.assertEqual(generator.timeout, 0.25)

    def test_unknown_source_falls_back_to_simulation(self):
        cfg = Config()
        cfg.sample_source = "bluetooth"
        with self.assertLogs("beam_coach", level="WARNING"):
            generator = create_generator(cfg)
        self.assertIsInstance(generator, SimulatedSampleGenerator)


class ConfigArgsTest(unittest.TestCase):
    def test_seed_selects_seeded_source(self):
        cfg = Config()
        cfg.setup_from_args(["--seed", "5"])
        self.assertEqual(cfg.sample_source, "seeded")
        self.assertEqual(cfg.sample_seed, 5)

    def test_explicit_source_wins(self):
        cfg = Config()
        cfg.setup_from_args(["--source", "sensor", "--mode", "non_debug", "--port", "9000"])
        self.assertEqual(cfg.sample_source, "sensor")
        self.assertEqual(cfg.debug_mode, "non_debug")
        self.assertEqual(cfg.port, 9000)
        self.assertEqual(cfg.mode_description, "Non-Debug Mode (minimal logging)")


if __name__ == "__main__":
    unittest.main()
