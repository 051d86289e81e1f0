from __future__ import annotations

from flask import Blueprint, jsonify

from jobly.core import database
from jobly.core.security import ensure_admin
from jobly.schemas import JobNew, JobSearch, JobUpdate, parse_args, parse_body
from jobly.services.jobs import Job

bp = Blueprint("jobs", __name__)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@bp.post("/jobs")
@ensure_admin
def create_job():
    data = parse_body(JobNew)
    with database.get_db() as db:
        job = Job.create(db, data.payload())
    return jsonify({"job": job}), 201


@bp.get("/jobs")
def list_jobs():
    """Anyone may search: ?title=&minSalary=&hasEquity=true"""
    search = parse_args(JobSearch)
    with database.get_db() as db:
        jobs = Job.find_all(db, search.criteria())
    return jsonify({"jobs": jobs})


@bp.get("/jobs/<int:job_id>")
def get_job(job_id):
    with database.get_db() as db:
        job = Job.get(db, job_id)
    return jsonify({"job": job})


@bp.patch("/jobs/<int:job_id>")
@ensure_admin
def update_job(job_id):
    data = parse_body(JobUpdate)
    with database.get_db() as db:
        job = Job.update(db, job_id, data.payload())
    return jsonify({"job": job})


@bp.delete("/jobs/<int:job_id>")
@ensure_admin
def delete_job(job_id):
    with database.get_db() as db:
        Job.remove(db, job_id)
    return jsonify({"deleted": job_id})
