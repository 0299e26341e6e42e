#!/usr/bin/env python3
"""
Manual smoke test for the Cre8 Video Worker.

Starts a small local webhook receiver (FastAPI served by uvicorn), submits a
job to a running worker and prints every status event until the job completes
or fails.

Usage:
    python examples/submit_job.py
    python examples/submit_job.py --aspect 16:9
    python examples/submit_job.py --worker-url http://localhost:5000 --receiver-port 8099

The worker secret is read from WORKER_SECRET (a .env file is honoured).
"""

import argparse
import json
import os
import queue
import threading
import time
import uuid

import requests
import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Header, Request
from fastapi.responses import JSONResponse

# Load environment variables
load_dotenv()

WORKER_URL = os.getenv("WORKER_URL", "http://localhost:5000")
WORKER_SECRET = os.getenv("WORKER_SECRET", "your-worker-secret")
WEBHOOK_SECRET = "local-webhook-secret"

events: "queue.Queue[dict]" = queue.Queue()


def create_receiver_app(webhook_secret: str, sink: "queue.Queue[dict]") -> FastAPI:
    """Webhook receiver that checks the bearer token and queues each event."""
    receiver = FastAPI(title="Local webhook receiver")

    @receiver.post("/hook")
    async def receive_event(request: Request, authorization: str = Header(None)):
        body = await request.json()

        if authorization != f"Bearer {webhook_secret}":
            print(f"   ⚠️  Webhook with bad token for job {body.get('job_id')}")
            return JSONResponse(status_code=401, content={"error": "Invalid authorization"})

        sink.put(body)
        return {"received": True}

    return receiver


def start_receiver(port: int) -> uvicorn.Server:
    config = uvicorn.Config(
        create_receiver_app(WEBHOOK_SECRET, events),
        host="127.0.0.1",
        port=port,
        log_level="warning",
    )
    server = uvicorn.Server(config)
    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()

    while not server.started and thread.is_alive():
        time.sleep(0.05)
    if not server.started:
        raise RuntimeError(f"Webhook receiver could not start on port {port}")
    return server


def submit_job(job_id: str, webhook_url: str, aspect: str = None) -> bool:
    """Submit a job and print the acknowledgement."""
    payload = {
        "job_id": job_id,
        "webhook_url": webhook_url,
        "webhook_secret": WEBHOOK_SECRET,
    }
    if aspect:
        payload["transform"] = {"layout": {"aspect": aspect}}

    print(f"\n🚀 Submitting job {job_id} to {WORKER_URL}")
    response = requests.post(
        f"{WORKER_URL}/process",
        headers={"Authorization": f"Bearer {WORKER_SECRET}"},
        json=payload,
        timeout=10,
    )

    if response.status_code != 200:
        print(f"❌ Failed to submit job: {response.status_code}")
        print(response.text)
        return False

    print(f"✅ Accepted: {response.json()}")
    return True


def wait_for_terminal_event(timeout_seconds: float) -> dict:
    """Print events as they arrive; return the terminal one."""
    start_time = time.time()

    while True:
        remaining = timeout_seconds - (time.time() - start_time)
        if remaining <= 0:
            print("\n⏰ Timed out waiting for the job to finish")
            return {}

        try:
            event = events.get(timeout=remaining)
        except queue.Empty:
            continue

        elapsed = time.time() - start_time
        progress = event.get("progress")
        progress_str = f"{progress * 100:5.1f}%" if progress is not None else "  -   "
        print(f"   [{progress_str}] [{elapsed:5.1f}s] {event['status']}: {event.get('message')}")

        if event["status"] in ("completed", "failed"):
            return event


def main():
    parser = argparse.ArgumentParser(description="Submit a test job to the Cre8 Video Worker")
    parser.add_argument("--worker-url", type=str, default=None, help="Worker base URL")
    parser.add_argument("--receiver-port", type=int, default=8099, help="Local webhook port")
    parser.add_argument("--aspect", type=str, default=None, help="Requested aspect ratio, e.g. 16:9")
    parser.add_argument("--timeout", type=float, default=60.0, help="Seconds to wait for completion")
    args = parser.parse_args()

    global WORKER_URL
    if args.worker_url:
        WORKER_URL = args.worker_url

    server = start_receiver(args.receiver_port)
    webhook_url = f"http://127.0.0.1:{args.receiver_port}/hook"
    job_id = f"test-{uuid.uuid4().hex[:8]}"

    try:
        if not submit_job(job_id, webhook_url, args.aspect):
            return

        final = wait_for_terminal_event(args.timeout)
        if final.get("status") == "completed":
            print("\n📊 Result:")
            print(json.dumps({"assets": final.get("assets"), "summary": final.get("summary")}, indent=2))
        elif final.get("status") == "failed":
            print(f"\n❌ Job failed: {final.get('error')}")
    finally:
        server.should_exit = True


if __name__ == "__main__":
    main()
