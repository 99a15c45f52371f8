"""
Tests for keyword extraction.

System role: Verification of chunk keyword derivation
"""

from agentdoc.core.document_processing.keywords import STOP_WORDS, extract_keywords


class TestExtractKeywords:
    """Test suite for extract_keywords."""

    def test_orders_by_frequency_then_first_occurrence(self) -> None:
        # Arrange
        text = "Neural networks train. Networks learn; neural NETWORKS!"

        # Act
        keywords = extract_keywords(text)

        # Assert
        assert keywords == ["networks", "neural", "train", "learn"]

    def test_drops_short_words_and_stop_words(self) -> None:
        keywords = extract_keywords("The cat and the dog would rather have biscuits")

        assert "cat" not in keywords
        assert "would" not in keywords
        assert "have" not in keywords
        assert keywords == ["rather", "biscuits"]

    def test_limit_caps_result(self) -> None:
        text = " ".join(f"word{i:02d}" for i in range(25))

        assert len(extract_keywords(text)) == 10
        assert len(extract_keywords(text, limit=3)) == 3

    def test_empty_input_returns_empty_list(self) -> None:
        assert extract_keywords("") == []
        assert extract_keywords("   ...!!! ") == []

    def test_deterministic_for_same_input(self) -> None:
        text = "Retrieval augmented generation grounds answers in retrieved passages passages"

        first = extract_keywords(text)

        assert all(extract_keywords(text) == first for _ in range(5))

    def test_stop_words_are_lowercase(self) -> None:
        assert all(word == word.lower() for word in STOP_WORDS)
