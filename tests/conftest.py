import pytest

from vibe_codegen.parsing import GeneratedFile

STREAM = """[PLAN]
{"files": [{"path": "src/App.tsx", "description": "entry"}, {"path": "src/components/Hero.tsx", "description": "hero"}]}
[/PLAN]
[FILE:src/App.tsx]
export default function App() {}
[/FILE]
[FILE:src/components/Hero.tsx]
export const Hero = () => null;
[/FILE]
[COMPLETE]
{"filesGenerated": 2, "success": true}
[/COMPLETE]
"""

APP = """import Navbar from './components/layout/Navbar';
import Footer from './components/layout/Footer';
import Hero from './components/sections/Hero';
import Features from './components/sections/Features';

const App = () => (
  <main className="bg-[var(--background)]">
    <Navbar />
    <Hero />
    <Features />
    <Footer />
  </main>
);

export default App;"""


def component(name: str, extra: str = "") -> str:
    lines = [
        "import type { BaseProps } from '../../types';",
        "",
        f"interface {name}Props extends BaseProps {{}}",
        "",
        f"const {name} = ({{ title }}: {name}Props) => (",
        '  <section className="bg-[var(--surface)] p-[var(--space-4)]">',
        "    <h2>{title}</h2>",
        extra,
        "  </section>",
        ");",
        "",
        f"export default {name};",
    ]
    return "\n".join(lines)


def padded(content: str, total_lines: int) -> str:
    """Дополнить файл строками-комментариями до нужного числа строк."""
    missing = total_lines - len(content.split("\n"))
    return content + "\n" + "\n".join("// filler" for _ in range(missing))


@pytest.fixture
def app_source():
    return APP


@pytest.fixture
def make_component():
    return component


@pytest.fixture
def pad():
    return padded


@pytest.fixture
def stream_text():
    return STREAM


@pytest.fixture
def react_project():
    return [
        GeneratedFile(path="src/App.tsx", content=APP),
        GeneratedFile(path="src/components/layout/Navbar.tsx", content=component("Navbar")),
        GeneratedFile(path="src/components/layout/Footer.tsx", content=component("Footer")),
        GeneratedFile(path="src/components/sections/Hero.tsx", content=component("Hero")),
        GeneratedFile(path="src/components/sections/Features.tsx", content=component("Features")),
        GeneratedFile(
            path="src/components/ui/Button.tsx",
            content=component("Button", '    <span data-variant="primary" data-size="md" />'),
        ),
        GeneratedFile(path="src/components/ui/Card.tsx", content=component("Card")),
        GeneratedFile(
            path="src/styles/design-tokens.css",
            content=":root {\n  --primary-500: hsl(250 80% 60%);\n  --space-4: 1rem;\n}",
        ),
        GeneratedFile(path="src/styles/globals.css", content="body {\n  margin: 0;\n}"),
        GeneratedFile(path="src/types/index.ts", content="export interface BaseProps {\n  title: string;\n}"),
    ]


@pytest.fixture
def html_project():
    return [
        GeneratedFile(
            path="index.html",
            content=(
                "<!DOCTYPE html>\n<html>\n<body>\n"
                "<header><nav>Menu</nav></header>\n"
                '<main><section><h1>Title</h1><h2>Sub</h2><img src="a.png" alt="A"></section></main>\n'
                "<footer>f</footer>\n"
                '<script src="script.js"></script>\n'
                "</body>\n</html>"
            ),
        ),
        GeneratedFile(
            path="styles.css",
            content=(
                "body { display: grid; background: linear-gradient(135deg, var(--primary), var(--accent)); }\n"
                "a { transition: color 0.3s; }\n"
                "a:hover { color: var(--accent); }\n"
                "@media (max-width: 600px) { body { display: flex; } }"
            ),
        ),
        GeneratedFile(
            path="script.js",
            content="document.querySelector('nav').addEventListener('click', () => {});",
        ),
    ]
