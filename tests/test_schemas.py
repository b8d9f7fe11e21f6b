import pytest
from pydantic import ValidationError

from vibe_codegen.parsing import CompletionSummary, GeneratedFile
from vibe_codegen.parsing.schemas import language_for_path, parse_completion, parse_plan


class TestGeneratedFile:
    def test_valid(self):
        f = GeneratedFile(path="src/App.tsx", content="export default App;")
        assert f.path == "src/App.tsx"
        assert f.language == "typescript"

    def test_missing_required_fields(self):
        with pytest.raises(ValidationError):
            GeneratedFile(path="a.js")

    def test_immutable(self):
        f = GeneratedFile(path="a.js", content="x")
        with pytest.raises(ValidationError):
            f.content = "y"

    @pytest.mark.parametrize("path,language", [
        ("a.jsx", "javascript"),
        ("a.js", "javascript"),
        ("styles/site.CSS", "css"),
        ("index.html", "html"),
        ("package.json", "json"),
        ("README.md", "markdown"),
        ("Dockerfile", "text"),
    ])
    def test_language(self, path, language):
        assert language_for_path(path) == language


class TestPlan:
    def test_valid(self):
        plan = parse_plan('{"files": [{"path": "src/App.tsx", "description": "entry"}]}')
        assert plan.files[0].path == "src/App.tsx"
        assert plan.files[0].description == "entry"

    def test_description_optional(self):
        assert parse_plan('{"files": [{"path": "a.js"}]}').files[0].description == ""

    @pytest.mark.parametrize("body", ["", "not json", '{"files": "nope"}', '{"files": [{"description": "x"}]}'])
    def test_invalid_returns_none(self, body):
        assert parse_plan(body) is None


class TestCompletion:
    def test_camel_case_alias(self):
        summary = parse_completion('{"filesGenerated": 3, "success": true}')
        assert summary == CompletionSummary(files_generated=3, success=True)

    def test_fields_optional(self):
        assert parse_completion("{}") == CompletionSummary()

    @pytest.mark.parametrize("body", ["", "   ", "[1, 2", '{"filesGenerated": "many"}'])
    def test_invalid_returns_none(self, body):
        assert parse_completion(body) is None
