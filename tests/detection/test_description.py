import unittest

from smart_commit.detection.description import categorize_files, generate_description


class TestCategorizeFiles(unittest.TestCase):
    def test_buckets(self):
        files = ["src/views/Home.vue", "src/api/users.ts", "README.md", "src/app.test"]
        buckets = categorize_files(files)
        self.assertEqual(buckets.components, ["src/views/Home.vue"])
        self.assertEqual(buckets.services, ["src/api/users.ts"])
        self.assertEqual(buckets.docs, ["README.md"])
        self.assertEqual(buckets.main, ["src/views/Home.vue", "src/api/users.ts"])


class TestGenerateDescription(unittest.TestCase):
    def test_feat_component(self):
        text = generate_description("feat", ["src/components/Button.tsx"])
        self.assertEqual(text, "add new src/components/Button.tsx component")

    def test_feat_service(self):
        text = generate_description("feat", ["src/billing.controller.ts"])
        self.assertEqual(text, "implement src/billing.controller.ts service")

    def test_feat_generic(self):
        self.assertEqual(generate_description("feat", ["src/app.py"]), "add new functionality")

    def test_fix(self):
        self.assertEqual(
            generate_description("fix", ["CHANGELOG.md", "src/auth/session.py"]),
            "resolve issue in src/auth/session.py",
        )
        self.assertEqual(generate_description("fix", ["notes.txt"]), "resolve issue in application")

    def test_docs(self):
        self.assertEqual(generate_description("docs", ["README.md"]), "update README.md")
        self.assertEqual(
            generate_description("docs", ["README.md", "docs/guide.md", "mkdocs.yml"]),
            "update documentation (3 files)",
        )

    def test_fixed_templates(self):
        cases = {
            "style": "update styling and formatting",
            "refactor": "refactor code structure",
            "test": "add/update tests",
            "build": "update build configuration",
            "ci": "update CI/CD configuration",
        }
        for commit_type, expected in cases.items():
            with self.subTest(commit_type=commit_type):
                self.assertEqual(generate_description(commit_type, ["x.py"]), expected)

    def test_default_template(self):
        self.assertEqual(generate_description("chore", [".gitignore"]), "update 1 file")
        self.assertEqual(generate_description("perf", ["a.py", "b.py"]), "update 2 files")

    def test_no_trailing_period(self):
        for commit_type in ("feat", "fix", "docs", "chore"):
            self.assertFalse(generate_description(commit_type, ["src/app.py"]).endswith("."))


if __name__ == "__main__":
    unittest.main()
