from vibe_codegen.parsing import GeneratedFile
from vibe_codegen.validation import DesignPatternValidator, Severity
from vibe_codegen.validation.design_patterns import Importance

HERO_CSS = """.hero {
  background: linear-gradient(135deg, var(--primary), var(--accent));
  transition: transform 0.3s ease;
  font-weight: 700;
}
@media (max-width: 768px) {
  .hero { padding: 1rem; }
}"""


def by_name(result):
    return {p.pattern: p for p in result.patterns}


class TestDesignPatternValidator:
    def test_missing_glassmorphism_only(self):
        result = DesignPatternValidator().validate([GeneratedFile(path="styles.css", content=HERO_CSS)])
        patterns = by_name(result)

        assert not patterns["Glassmorphism Effects"].found
        assert patterns["Glassmorphism Effects"].importance == Importance.IMPORTANT
        assert all(p.found for name, p in patterns.items() if name != "Glassmorphism Effects")
        assert result.score == 88
        assert result.valid
        assert [i.message for i in result.issues] == ["Missing pattern: Glassmorphism Effects"]
        assert result.issues[0].severity == Severity.IMPORTANT
        assert len(result.suggestions) == 1

    def test_missing_critical_pattern_invalidates(self):
        css = "a { transition: all 0.3s; font-weight: 600; display: flex; color: var(--c); backdrop-filter: blur(4px); }"
        result = DesignPatternValidator().validate([GeneratedFile(path="a.css", content=css)])
        assert result.score == 80
        assert not result.valid
        assert not by_name(result)["Gradient Backgrounds"].found

    def test_no_styled_files(self):
        result = DesignPatternValidator().validate([GeneratedFile(path="data.json", content="{}")])
        assert result.score == 4
        assert not result.valid
        assert len(result.patterns) == 6
        assert len(result.suggestions) == 6

    def test_components_with_class_names_count(self):
        tsx = GeneratedFile(
            path="src/Hero.tsx",
            content='<div className="bg-gradient-to-br transition-all font-[inter] md:flex backdrop-blur bg-[var(--x)]" />',
        )
        result = DesignPatternValidator().validate([tsx])
        assert result.score == 100
        assert result.issues == []
