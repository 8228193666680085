import argparse
from typing import List, Optional

class Config:
    """
    Central configuration manager for the BEAM balance coach backend.
    Handles command-line argument parsing, debug modes, and balance parameters.
    """

    def __init__(self):
        # Application mode settings
        self.debug_mode: str = "debug"
        self.host: str = "0.0.0.0"
        self.port: int = 8000

        # Feedback thresholds on abs(left - right), in percentage points
        self.slight_imbalance_threshold: float = 10.0
        self.significant_imbalance_threshold: float = 20.0

        # Sample generation
        self.sample_source: str = "simulated"  # simulated | seeded | sensor
        self.sample_seed: Optional[int] = None
        self.sample_low: float = 40.0   # Simulated readings are drawn from [low, high]
        self.sample_high: float = 60.0
        self.sensor_timeout: float = 2.0  # Seconds to wait for a sensor reading

        # Workout timer cadence (seconds between ticks)
        self.tick_interval: float = 1.0

        # History settings
        self.history_capacity: Optional[int] = None  # None = unbounded
        self.demo_history_days: int = 7
        self.demo_exercise: str = "Barbell Bench Press"

        self.supported_sources: List[str] = ["simulated", "seeded", "sensor"]

        # Human-readable descriptions for each debug mode
        self.mode_descriptions = {
            "debug": "Debug Mode (verbose logging)",
            "non_debug": "Non-Debug Mode (minimal logging)"
        }

    def setup_from_args(self, argv: Optional[List[str]] = None):
        """
        Parse command line arguments and configure application settings.
        A seed implies the deterministic "seeded" source unless one is given.
        """
        parser = argparse.ArgumentParser(description="BEAM Balance Coach Backend")
        parser.add_argument(
            "--mode",
            choices=["debug", "non_debug"],
            default="debug",
            help="Debug mode setting"
        )
        parser.add_argument(
            "--source",
            choices=self.supported_sources,
            default=None,
            help="Where balance readings come from"
        )
        parser.add_argument("--seed", type=int, default=None, help="Seed for the seeded generator")
        parser.add_argument("--port", type=int, default=self.port, help="HTTP port")
        args = parser.parse_args(argv)

        self.debug_mode = args.mode
        self.port = args.port
        self.sample_seed = args.seed

        if args.source:
            self.sample_source = args.source
        elif args.seed is not None:
            self.sample_source = "seeded"

    @property
    def mode_description(self) -> str:
        """Get human-readable description of current mode"""
        return self.mode_descriptions[self.debug_mode]

# Global configuration instance - import this in other modules
config = Config()
