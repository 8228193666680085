# main.py
import asyncio
import time
from datetime import timedelta

from fastapi import FastAPI, Form, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from beam_coach.config import config
from beam_coach.utils.logging_utils import logger
from beam_coach.utils.status import get_status_text
from beam_coach.models.catalog import EXERCISES, find_exercise
from beam_coach.models.errors import BalanceError
from beam_coach.models.schemas import BalanceSampleModel, ExerciseModel, HistoryResponse, WorkoutState
from beam_coach.models.workout_session import WorkoutSession, utc_now
from beam_coach.services.workout_timer import WorkoutTimer

logger.info(f"Starting in: {config.mode_description}")

app = FastAPI(title=f"BEAM Balance Coach Backend - {config.mode_description}")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

DEFAULT_EXERCISE = EXERCISES[0].name

# Look-back windows for the statistics range picker
TIME_RANGES = {
    "week": timedelta(days=7),
    "month": timedelta(days=30),
    "year": timedelta(days=365),
}

# Session storage for maintaining workout state across requests
workout_sessions = {}
workout_timers = {}


def resolve_exercise(name: str) -> str:
    """Map a requested exercise to a catalog name, defaulting when unknown"""
    exercise = find_exercise(name) if name else None
    if exercise is None:
        logger.warning(f"Unknown exercise '{name}', defaulting to {DEFAULT_EXERCISE}")
        return DEFAULT_EXERCISE
    return exercise.name


def new_session(exercise: str) -> WorkoutSession:
    """Create a session whose history starts with the demo week"""
    session = WorkoutSession(exercise=exercise)
    session.seed_demo_history()
    return session


def get_session(session_id: str = "default", exercise: str = DEFAULT_EXERCISE) -> WorkoutSession:
    if session_id not in workout_sessions:
        workout_sessions[session_id] = new_session(exercise)
        workout_timers[session_id] = WorkoutTimer(workout_sessions[session_id])
    return workout_sessions[session_id]


def build_state(session: WorkoutSession) -> WorkoutState:
    """Snapshot the session into the response model"""
    state = WorkoutState(
        exercise=session.exercise,
        status=get_status_text(session.last_error, session.is_active),
        isWorkoutActive=session.is_active,
        errorMessage=str(session.last_error) if session.last_error else None,
        samplesRecorded=len(session.history)
    )

    result = session.last_result
    if result is not None:
        state.leftSide = round(result.sample.left_side, 1)
        state.rightSide = round(result.sample.right_side, 1)
        state.tier = result.tier.name
        state.feedback = result.message
        state.feedbackColor = result.tier.color
        state.lastSampleAt = int(result.sample.timestamp.timestamp() * 1000)

    return state


@app.on_event("startup")
async def startup_event():
    logger.info(f"Sample source: {config.sample_source}, tick interval: {config.tick_interval}s")


@app.on_event("shutdown")
async def shutdown_event():
    """Stop every running workout timer"""
    for timer in workout_timers.values():
        await timer.stop()


@app.get("/health")
async def health_check():
    """Simple health check endpoint for service monitoring"""
    return {"status": "healthy", "timestamp": time.time()}


@app.get("/exercises", response_model=list[ExerciseModel])
async def list_exercises():
    return [ExerciseModel.from_exercise(e) for e in EXERCISES]


@app.post("/start_workout", response_model=WorkoutState)
async def start_workout(exercise: str = Form(DEFAULT_EXERCISE)):
    """Start ticking the default session for the chosen exercise"""
    exercise = resolve_exercise(exercise)
    session = get_session(exercise=exercise)
    session.switch_exercise(exercise)
    workout_timers["default"].start()
    return build_state(session)


@app.post("/stop_workout", response_model=WorkoutState)
async def stop_workout():
    session = get_session()
    await workout_timers["default"].stop()
    return build_state(session)


@app.post("/tick", response_model=WorkoutState)
async def tick():
    """
    Run one generate/evaluate/store cycle immediately.
    Recoverable balance errors come back in errorMessage rather than as HTTP errors.
    """
    session = get_session()
    try:
        await asyncio.to_thread(session.tick)
    except BalanceError as e:
        logger.warning(f"Tick reported to client: {e}")
    except Exception as e:
        logger.error(f"Error during tick: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return build_state(session)


@app.get("/workout_state", response_model=WorkoutState)
async def workout_state():
    return build_state(get_session())


@app.get("/history", response_model=HistoryResponse)
async def history(time_range: str = "all"):
    """Stored samples, optionally limited to the last week, month or year"""
    session = get_session()

    if time_range == "all":
        samples = list(session.history.all())
    elif time_range in TIME_RANGES:
        samples = session.history.since(utc_now() - TIME_RANGES[time_range])
    else:
        raise HTTPException(status_code=400, detail=f"Unknown time range '{time_range}'")

    return HistoryResponse(
        timeRange=time_range,
        count=len(samples),
        samples=[BalanceSampleModel.from_sample(s) for s in samples]
    )


@app.post("/reset_session", response_model=WorkoutState)
async def reset_session(exercise: str = Form(DEFAULT_EXERCISE)):
    """Discard the session history and start over with the demo week"""
    try:
        exercise = resolve_exercise(exercise)
        session_id = "default"

        if session_id in workout_timers:
            await workout_timers[session_id].stop()

        workout_sessions[session_id] = new_session(exercise)
        workout_timers[session_id] = WorkoutTimer(workout_sessions[session_id])
        logger.info(f"Session {session_id} reset successfully (exercise={exercise})")

        return build_state(workout_sessions[session_id])

    except Exception as e:
        logger.error(f"Error resetting session: {e}")
        raise HTTPException(status_code=500, detail=str(e))
