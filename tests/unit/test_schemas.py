"""Tests for request/response schemas."""

import pytest
from pydantic import ValidationError

from lorekeeper.api.v1.schemas import AskRequest, SubmitStoryRequest, SubmitStoryResponse


class TestSubmitStoryRequest:
    def test_valid(self):
        assert SubmitStoryRequest(story="A tale.").story == "A tale."

    @pytest.mark.parametrize("story", ["", "   ", "\n\t"])
    def test_blank_rejected(self, story):
        with pytest.raises(ValidationError):
            SubmitStoryRequest(story=story)

    def test_missing_rejected(self):
        with pytest.raises(ValidationError):
            SubmitStoryRequest.model_validate({})

    def test_non_string_rejected(self):
        with pytest.raises(ValidationError):
            SubmitStoryRequest.model_validate({"story": 42})


class TestAskRequest:
    def test_camel_case_aliases(self):
        request = AskRequest.model_validate({
            "query": "Who are you?",
            "characterName": "Ember",
            "summarizedStory": "A fox story.",
        })
        assert request.character_name == "Ember"
        assert request.summarized_story == "A fox story."

    def test_field_names_accepted(self):
        request = AskRequest(query="q", character_name="c", summarized_story="s")
        assert request.query == "q"

    def test_blank_character_rejected(self):
        with pytest.raises(ValidationError):
            AskRequest.model_validate({
                "query": "Who?",
                "characterName": "  ",
                "summarizedStory": "A fox story.",
            })


class TestSubmitStoryResponse:
    def test_serializes_story_id_in_camel_case(self):
        response = SubmitStoryResponse(message="ok", story_id="abc")
        assert response.model_dump(by_alias=True) == {"message": "ok", "storyId": "abc"}
