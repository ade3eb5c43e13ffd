"""Locust scenarios exercising XP awards and dashboards under load."""
from __future__ import annotations

import random
import string
import uuid

from locust import FastHttpUser, between, task

SIMULATIONS = ["thumbnail_creator", "post_scheduler", "hashtag_generator", "analytics_viewer"]


def _random_email() -> str:
    token = uuid.uuid4().hex[:10]
    return f"load-{token}@example.com"


def _random_password(length: int = 12) -> str:
    alphabet = string.ascii_letters + string.digits
    return "".join(random.choice(alphabet) for _ in range(length))


class CreatorUser(FastHttpUser):
    """Simulate a learner working through modules, quizzes and simulations."""

    wait_time = between(1, 3)

    def on_start(self) -> None:
        self.email = _random_email()
        self.password = _random_password()
        self.token: str | None = None
        self.module_ids: list[int] = []
        self.quiz_ids: list[int] = []
        self._register()
        self._login()
        self._load_catalog()

    def _headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def _register(self) -> None:
        payload = {"email": self.email, "password": self.password, "first_name": "Load"}
        self.client.post("/api/v1/auth/register", json=payload, name="auth:register")

    def _login(self) -> None:
        payload = {"email": self.email, "password": self.password}
        response = self.client.post("/api/v1/auth/login", json=payload, name="auth:login")
        if response.ok:
            self.token = response.json().get("access_token")

    def _load_catalog(self) -> None:
        response = self.client.get("/api/v1/modules", headers=self._headers(), name="modules:list")
        if not response.ok:
            return
        self.module_ids = [module["id"] for module in response.json()]
        for module_id in self.module_ids:
            quizzes = self.client.get(
                f"/api/v1/modules/{module_id}/quizzes",
                headers=self._headers(),
                name="modules:quizzes",
            )
            if quizzes.ok:
                self.quiz_ids.extend(quiz["id"] for quiz in quizzes.json())

    @task(3)
    def use_simulation(self) -> None:
        self.client.post(
            f"/api/v1/simulations/{random.choice(SIMULATIONS)}/use",
            headers=self._headers(),
            name="simulations:use",
        )

    @task(2)
    def progress_module(self) -> None:
        if not self.module_ids:
            return
        status = random.choice(["in_progress", "completed"])
        self.client.post(
            "/api/v1/progress/modules",
            json={
                "moduleId": random.choice(self.module_ids),
                "status": status,
                "progress": random.randint(10, 90),
            },
            headers=self._headers(),
            name="progress:modules",
        )

    @task(2)
    def attempt_quiz(self) -> None:
        if not self.quiz_ids:
            return
        self.client.post(
            "/api/v1/quiz-attempts",
            json={"quizId": random.choice(self.quiz_ids), "score": random.randint(40, 100)},
            headers=self._headers(),
            name="quiz-attempts:create",
        )

    @task(1)
    def fetch_summary(self) -> None:
        self.client.get("/api/v1/progress/summary", headers=self._headers(), name="progress:summary")

    @task(1)
    def fetch_leaderboard(self) -> None:
        self.client.get("/api/v1/leaderboard", headers=self._headers(), name="leaderboard")
