"""Submission categories."""

from enum import Enum


class SubmissionCategory(str, Enum):
    """The closed set of sections a member can submit to."""

    MY_NEWS = "MY_NEWS"
    SAYING_HELLO = "SAYING_HELLO"
    MY_SAY = "MY_SAY"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_LABELS: dict[SubmissionCategory, str] = {
    SubmissionCategory.MY_NEWS: "My News",
    SubmissionCategory.SAYING_HELLO: "Saying Hello",
    SubmissionCategory.MY_SAY: "My Say",
}

_DESCRIPTIONS: dict[SubmissionCategory, str] = {
    SubmissionCategory.MY_NEWS: "Share your latest news and updates",
    SubmissionCategory.SAYING_HELLO: "Say hello to the community",
    SubmissionCategory.MY_SAY: "Share your thoughts and opinions",
}
