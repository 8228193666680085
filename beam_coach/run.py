import uvicorn
from beam_coach.config import config
from beam_coach.utils.logging_utils import apply_log_level


def main(argv=None):
    config.setup_from_args(argv)
    apply_log_level()

    # Imported after argument parsing so the app title reflects the mode
    from beam_coach.main import app

    # Display startup information with available command-line options
    print("\n" + "="*60)
    print("BEAM Balance Coach Backend")
    print("="*60)
    print(f"Mode: {config.mode_description}")
    print(f"Sample source: {config.sample_source}")
    print("\nAvailable options:")
    print("  beam-coach --mode debug              # Verbose logging")
    print("  beam-coach --mode non_debug          # Minimal logging only")
    print("  beam-coach --source seeded --seed 42 # Reproducible readings")
    print("="*60 + "\n")

    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    main()
