"""Tests for the file, content and combined scorers."""

import unittest

from smart_commit.detection.models import AnalysisResult
from smart_commit.detection.rules import DEFAULT_RULES, ScoringWeights, empty_scores
from smart_commit.detection.scoring import (
    apply_fallback_heuristics,
    combine_analyses,
    combine_scores,
    score_content,
    score_files,
)

from sample_changes import PACKAGE_DIFF


class TestScoreFiles(unittest.TestCase):
    def test_single_markdown_file(self):
        result = score_files(["README.md"])
        self.assertEqual(result.type, "docs")
        self.assertEqual(result.confidence, 1.0)
        self.assertEqual(result.reason, "Matches docs pattern: README.md")

    def test_first_matching_pattern_counts_once_per_category(self):
        # docs/guide.md matches several docs patterns
        result = score_files(["docs/guide.md"])
        self.assertEqual(result.all_scores["docs"], 1)

    def test_file_can_score_in_several_categories(self):
        result = score_files(["tests/helpers.py"])
        self.assertEqual(result.all_scores["test"], 1)
        self.assertEqual(result.all_scores["feat"], 0)

    def test_new_source_file_bonus(self):
        path = "src/components/Button.tsx"
        result = score_files([path], [path])
        self.assertEqual(result.type, "feat")
        self.assertEqual(result.all_scores["feat"], 3)
        # not clamped at this stage
        self.assertEqual(result.confidence, 3.0)
        self.assertIn("1 new source files added", result.reason)

    def test_new_non_source_file_has_no_bonus(self):
        result = score_files(["notes.md"], ["notes.md"])
        self.assertEqual(result.all_scores["feat"], 0)

    def test_confidence_is_divided_by_file_count(self):
        result = score_files(["README.md", "src/app.py", "src/util.py"])
        self.assertEqual(result.type, "feat")
        self.assertAlmostEqual(result.confidence, 2 / 3)

    def test_tie_goes_to_later_category(self):
        result = score_files(["README.md", ".gitignore"])
        self.assertEqual(result.all_scores["docs"], 1)
        self.assertEqual(result.all_scores["chore"], 1)
        self.assertEqual(result.type, "chore")

    def test_no_match_defaults(self):
        result = score_files(["Makefile"])
        self.assertEqual(result.type, "chore")
        self.assertEqual(result.confidence, 0)
        self.assertEqual(result.reason, "Pattern-based detection")

    def test_every_category_has_a_score(self):
        result = score_files(["README.md"])
        self.assertEqual(set(result.all_scores), set(DEFAULT_RULES.order))


class TestScoreContent(unittest.TestCase):
    def test_empty_diff(self):
        result = score_content("")
        self.assertEqual(result.type, "chore")
        self.assertEqual(result.confidence, 0)
        self.assertEqual(result.reason, "No diff content")
        self.assertTrue(all(score == 0 for score in result.all_scores.values()))

    def test_whitespace_diff_counts_as_empty(self):
        self.assertEqual(score_content("  \n\n").reason, "No diff content")

    def test_fix_keywords_and_patterns(self):
        result = score_content("fix the bug")
        # keywords fix + bug, plus " bug" for the removed-line pattern
        self.assertEqual(result.all_scores["fix"], 2.0)
        self.assertEqual(result.type, "fix")
        self.assertAlmostEqual(result.confidence, 0.2)
        self.assertEqual(result.reason, "Content analysis: 2 keyword matches")

    def test_added_line_fix_pattern(self):
        result = score_content("+ patch the loader")
        # keyword patch (0.5) + added-line pattern (1)
        self.assertEqual(result.all_scores["fix"], 1.5)

    def test_keywords_are_case_insensitive(self):
        result = score_content("Add NEW Feature")
        self.assertEqual(result.all_scores["feat"], 1.5)

    def test_keywords_match_whole_words_only(self):
        result = score_content("+debugger; adding; renewal")
        self.assertEqual(result.all_scores["fix"], 0)
        self.assertEqual(result.all_scores["feat"], 0)

    def test_repeated_keywords_accumulate(self):
        once = score_content("+readme")
        twice = score_content("+readme readme")
        self.assertEqual(once.all_scores["docs"], 0.5)
        self.assertEqual(twice.all_scores["docs"], 1.0)

    def test_package_manifest_diff(self):
        result = score_content(PACKAGE_DIFF)
        self.assertEqual(result.type, "build")
        self.assertEqual(result.all_scores["build"], 2.5)


class TestCombine(unittest.TestCase):
    def test_weighted_combination(self):
        files = AnalysisResult("build", 1.0, "files", dict(empty_scores(DEFAULT_RULES), build=2))
        content = AnalysisResult("build", 0.25, "content", dict(empty_scores(DEFAULT_RULES), build=2.5))
        combined = combine_scores(files, content)
        self.assertAlmostEqual(combined["build"], 2.15)
        self.assertEqual(combined["feat"], 0)

        detection = combine_analyses(files, content)
        self.assertEqual(detection.type, "build")
        self.assertAlmostEqual(detection.confidence, 2.15 / 3)
        self.assertEqual(detection.reason, "Combined analysis: files + content")

    def test_confidence_is_clamped(self):
        files = AnalysisResult("feat", 5.0, "files", dict(empty_scores(DEFAULT_RULES), feat=10))
        content = score_content("")
        self.assertEqual(combine_analyses(files, content).confidence, 1.0)

    def test_low_confidence_uses_fallback(self):
        files = score_files(["README.md"])
        detection = combine_analyses(files, score_content(""))
        self.assertEqual(detection.type, "docs")
        self.assertEqual(detection.confidence, 0.8)
        self.assertEqual(detection.reason, "Only documentation files modified")

    def test_custom_weights_change_the_outcome(self):
        files = score_files(["README.md"])
        weights = ScoringWeights(fallback_threshold=0.1)
        detection = combine_analyses(files, score_content(""), weights=weights)
        self.assertEqual(detection.type, "docs")
        self.assertAlmostEqual(detection.confidence, 0.7 / 3)
        self.assertEqual(
            detection.reason, "Combined analysis: Matches docs pattern: README.md + No diff content"
        )


class TestFallback(unittest.TestCase):
    def _analysis(self, type_, confidence):
        return AnalysisResult(type_, confidence, "", empty_scores(DEFAULT_RULES))

    def test_docs(self):
        detection = apply_fallback_heuristics(self._analysis("docs", 1.0), self._analysis("chore", 0))
        self.assertEqual((detection.type, detection.confidence), ("docs", 0.8))

    def test_chore(self):
        detection = apply_fallback_heuristics(self._analysis("chore", 0.6), self._analysis("chore", 0))
        self.assertEqual((detection.type, detection.confidence), ("chore", 0.7))
        self.assertEqual(detection.reason, "Only configuration files modified")

    def test_trigger_is_strict(self):
        detection = apply_fallback_heuristics(self._analysis("docs", 0.5), self._analysis("chore", 0))
        self.assertEqual(detection.type, "feat")

    def test_default(self):
        detection = apply_fallback_heuristics(self._analysis("test", 1.0), self._analysis("chore", 0))
        self.assertEqual((detection.type, detection.confidence), ("feat", 0.4))
        self.assertEqual(detection.reason, "Default fallback - assuming feature development")


if __name__ == "__main__":
    unittest.main()
