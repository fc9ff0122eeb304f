import os
import sys
import time

# Ensure backend/ is on sys.path so sibling imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from flask import Flask, g, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from dotenv import load_dotenv

from catalog import list_all_courses, list_courses_by_major, list_majors
from data_loader import load_catalog
from errors import BackendError, StorageWriteError
from registration import (
    MUTATING_OUTCOMES,
    complete_registration,
    delete_student,
    get_by_email,
    get_by_id,
    register,
    register_course,
    update_courses,
)
from student_store import StudentStore
from validators import require_json_object

load_dotenv()

app = Flask(__name__)

APP_NAME = "EduTutor Pro Backend"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Backend API for EduTutor Pro Course Registration System"
API_PREFIX = "/api"

# ── Paths ─────────────────────────────────────────────────────────────────────
BACKEND_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(BACKEND_DIR)
_DEFAULT_CATALOG_PATH = os.path.join(PROJECT_ROOT, "data", "courses.csv")
_DEFAULT_STUDENTS_PATH = os.path.join(PROJECT_ROOT, "data", "students.json")


def _env_path(name: str, default: str) -> str:
    raw = os.environ.get(name)
    if not raw:
        return default
    if not os.path.isabs(raw):
        return os.path.join(PROJECT_ROOT, raw)
    return raw


def _env_float(name: str, default: float, minimum: float = 0.0) -> float:
    raw = os.environ.get(name, "")
    try:
        return max(minimum, float(raw))
    except (TypeError, ValueError):
        return default


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.environ.get(name, "")
    try:
        return max(minimum, int(raw))
    except (TypeError, ValueError):
        return default


def _env_list(name: str) -> list[str]:
    raw = os.environ.get(name, "")
    return [item.strip().rstrip("/") for item in raw.split(",") if item.strip()]


CATALOG_PATH = _env_path("CATALOG_PATH", _DEFAULT_CATALOG_PATH)
STUDENTS_PATH = _env_path("STUDENTS_PATH", _DEFAULT_STUDENTS_PATH)
APP_ENV = os.environ.get("APP_ENV") or os.environ.get("FLASK_ENV") or "development"
HOST = os.environ.get("HOST", "0.0.0.0")
PORT = _env_int("PORT", 5000)

_SLOW_REQUEST_LOG_MS = _env_float("SLOW_REQUEST_LOG_MS", 750.0, minimum=0.0)

# ── CORS ──────────────────────────────────────────────────────────────────────
_DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "https://edututor-pro.netlify.app",
]
ALLOWED_ORIGINS = list(dict.fromkeys(_DEFAULT_ALLOWED_ORIGINS + _env_list("FRONTEND_URL")))

CORS(
    app,
    resources={rf"{API_PREFIX}/*": {"origins": ALLOWED_ORIGINS}},
    supports_credentials=True,
    methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# ── Startup data load ──────────────────────────────────────────────────────────
try:
    _catalog = load_catalog(CATALOG_PATH)
    print(f"[OK] Loaded {_catalog['course_count']} courses in {len(_catalog['majors'])} majors from {CATALOG_PATH}")
except FileNotFoundError:
    # Render safety: if CATALOG_PATH env var is stale, fall back to the repo catalog.
    if CATALOG_PATH != _DEFAULT_CATALOG_PATH and os.path.exists(_DEFAULT_CATALOG_PATH):
        print(
            f"[WARN] CATALOG_PATH not found ({CATALOG_PATH}); "
            f"falling back to default catalog ({_DEFAULT_CATALOG_PATH}).",
            file=sys.stderr,
        )
        CATALOG_PATH = _DEFAULT_CATALOG_PATH
        _catalog = load_catalog(CATALOG_PATH)
        print(f"[OK] Loaded {_catalog['course_count']} courses in {len(_catalog['majors'])} majors from {CATALOG_PATH}")
    else:
        print(f"[FATAL] Catalog file not found: {CATALOG_PATH}", file=sys.stderr)
        sys.exit(1)
except Exception as exc:
    print(f"[FATAL] Failed to load catalog: {exc}", file=sys.stderr)
    sys.exit(1)

_store = StudentStore(STUDENTS_PATH)
print(f"[OK] Student records stored in {STUDENTS_PATH}")


# -- Request hooks -----------------------------------------------------------
@app.before_request
def _start_request_timer():
    g._request_start_time = time.perf_counter()


@app.after_request
def _add_security_headers(response):
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["Referrer-Policy"] = "same-origin"

    started = getattr(g, "_request_start_time", None)
    if started is not None:
        duration_ms = (time.perf_counter() - started) * 1000.0
        if duration_ms >= _SLOW_REQUEST_LOG_MS:
            endpoint = request.endpoint or "unknown"
            print(
                f"[SLOW] {request.method} {request.path} "
                f"endpoint={endpoint} status={response.status_code} duration_ms={duration_ms:.1f}"
            )
    return response


# ── Error handlers ─────────────────────────────────────────────────────────────
@app.errorhandler(StorageWriteError)
def handle_storage_write_error(e):
    print(f"[ERROR] {e.message}", file=sys.stderr)
    return jsonify({"message": "An unexpected server error occurred."}), 500


@app.errorhandler(BackendError)
def handle_backend_error(e):
    return jsonify({"message": e.message}), e.status


@app.errorhandler(HTTPException)
def handle_http_error(e):
    return jsonify({"message": e.description}), e.code


@app.errorhandler(Exception)
def handle_unexpected_error(e):
    print(f"[ERROR] {request.method} {request.path} failed: {type(e).__name__}: {e}", file=sys.stderr)
    return jsonify({"message": "An unexpected server error occurred."}), 500


def _json_body() -> dict:
    return require_json_object(request.get_json(force=True, silent=True))


def _apply_student_change(operation: str, change, *args):
    """Run one registration function inside a store transaction; persist only real changes."""
    with _store.transaction() as batch:
        student, outcome = change(batch.students, *args)
        batch.changed = outcome in MUTATING_OUTCOMES
    print(f"[INFO] {operation}: student id={student.get('id')} outcome={outcome}")
    return student, outcome


# -- Health endpoint --------------------------------------------------------
@app.route(f"{API_PREFIX}/health", methods=["GET"])
def health_endpoint():
    return jsonify({
        "status": "OK",
        "message": "EduTutor Pro API is running",
        "version": APP_VERSION,
        "environment": APP_ENV,
    })


# ── Catalog routes ─────────────────────────────────────────────────────────────
@app.route(f"{API_PREFIX}/majors", methods=["GET"])
def get_majors():
    return jsonify(list_majors(_catalog))


@app.route(f"{API_PREFIX}/courses", methods=["GET"])
def get_courses():
    return jsonify(list_all_courses(_catalog))


@app.route(f"{API_PREFIX}/courses/<path:major_name>", methods=["GET"])
def get_courses_by_major(major_name):
    return jsonify(list_courses_by_major(_catalog, major_name))


# ── Student routes ─────────────────────────────────────────────────────────────
@app.route(f"{API_PREFIX}/students/register", methods=["POST"])
def register_student():
    body = _json_body()
    student, outcome = _apply_student_change(
        "register", register, body.get("name"), body.get("email")
    )
    if outcome == "existing":
        return jsonify({"message": "Student already registered", "student": student}), 200
    return jsonify({"message": "Registration successful", "student": student}), 201


@app.route(f"{API_PREFIX}/students/complete-registration", methods=["POST"])
def complete_student_registration():
    """Register a new student with courses, or merge courses into an existing one."""
    body = _json_body()
    student, outcome = _apply_student_change(
        "complete-registration",
        complete_registration,
        body.get("name"),
        body.get("email"),
        body.get("selectedCourses"),
    )
    if outcome == "created":
        return jsonify({"message": "Registration complete", "student": student}), 201
    return jsonify({"message": "Courses added successfully", "student": student}), 200


@app.route(f"{API_PREFIX}/students/email/<path:email>", methods=["GET"])
def get_student_by_email(email):
    """Lookup used by the frontend to restore a session after reload."""
    return jsonify(get_by_email(_store.snapshot(), email))


@app.route(f"{API_PREFIX}/students/register-course", methods=["POST"])
def register_student_course():
    body = _json_body()
    student, _ = _apply_student_change(
        "register-course", register_course, body.get("email"), body.get("course")
    )
    return jsonify({"message": "Course registered successfully", "student": student}), 200


@app.route(f"{API_PREFIX}/students", methods=["GET"])
def get_students():
    return jsonify(_store.snapshot())


@app.route(f"{API_PREFIX}/students/<student_id>", methods=["GET"])
def get_student(student_id):
    return jsonify(get_by_id(_store.snapshot(), student_id))


@app.route(f"{API_PREFIX}/students/<student_id>/update-courses", methods=["PUT"])
def update_student_courses(student_id):
    body = request.get_json(force=True, silent=True)
    selected_courses = body.get("selectedCourses") if isinstance(body, dict) else None
    student, _ = _apply_student_change(
        "update-courses", update_courses, student_id, selected_courses
    )
    return jsonify({"message": "Courses updated successfully", "student": student}), 200


@app.route(f"{API_PREFIX}/students/<student_id>", methods=["DELETE"])
def delete_student_record(student_id):
    student, _ = _apply_student_change("delete", delete_student, student_id)
    return jsonify({"message": "Student deleted successfully", "student": student}), 200


# -- API catch-all (404 for unknown /api/* routes) -------------------
@app.route(f"{API_PREFIX}/<path:rest>", methods=["GET", "POST", "PUT", "DELETE", "PATCH"])
def api_catch_all(rest):
    return jsonify({"message": f"{API_PREFIX}/{rest} not found"}), 404


if __name__ == "__main__":
    debug = os.environ.get("FLASK_DEBUG", "1" if APP_ENV == "development" else "0") == "1"
    print(f"[OK] {APP_NAME} v{APP_VERSION} running on port {PORT} ({APP_ENV})")
    if os.environ.get("RENDER") == "true":
        print(f"[INFO] API endpoints available at {API_PREFIX} (Render environment detected)")
    else:
        print(f"[INFO] API endpoints available at http://localhost:{PORT}{API_PREFIX}")
    app.run(host=HOST, port=PORT, debug=debug)
