"""Locust load testing script for Lorekeeper."""

import random

from locust import HttpUser, between, task

SAMPLE_STORIES = [
    "A princess lived in a castle.",
    "A young fox named Ember crossed the frozen river to find her lost brother, "
    "guided by an old owl called Sage who spoke only in riddles.",
    "Captain Mira and her navigator Tobias sailed past the edge of the map, "
    "where the sea turned to glass and the stars hummed.",
]

SAMPLE_QUESTIONS = [
    "What do you fear most?",
    "Where were you born?",
    "Who is your closest friend?",
]


class LorekeeperUser(HttpUser):
    """Simulated client submitting stories and chatting with characters."""

    wait_time = between(1, 3)  # Wait 1-3 seconds between tasks

    def on_start(self) -> None:
        self.story_ids: list[str] = []

    @task(1)
    def submit_story(self) -> None:
        """Submit a story for background summarization."""
        response = self.client.post(
            "/api/v1/stories", json={"story": random.choice(SAMPLE_STORIES)}
        )
        if response.status_code == 200:
            self.story_ids.append(response.json()["storyId"])

    @task(4)
    def poll_summary(self) -> None:
        """Poll a previously submitted story; 202 is an expected answer."""
        if not self.story_ids:
            return
        story_id = random.choice(self.story_ids)
        with self.client.get(
            f"/api/v1/stories/{story_id}/summary",
            name="/api/v1/stories/[id]/summary",
            catch_response=True,
        ) as response:
            if response.status_code in (200, 202):
                response.success()

    @task(2)
    def extract_character_names(self) -> None:
        """Extract names; repeated stories exercise the cache."""
        self.client.post(
            "/api/v1/characters/names", json={"story": random.choice(SAMPLE_STORIES)}
        )

    @task(2)
    def ask_character(self) -> None:
        """Ask a character a question about a summarized story."""
        self.client.post(
            "/api/v1/characters/ask",
            json={
                "query": random.choice(SAMPLE_QUESTIONS),
                "characterName": "Ember",
                "summarizedStory": SAMPLE_STORIES[1],
            },
        )
