PROTOCOL_PROMPT = """You generate multi-file web projects.
Answer ONLY in the following plain-text marker format, no markdown fences, no prose outside markers:

[PLAN]
{{"files":[{{"path":"src/App.tsx","description":"..."}}]}}
[/PLAN]
[FILE:src/App.tsx]
<complete file content>
[/FILE]
... one [FILE:path]...[/FILE] block per file ...
[COMPLETE]
{{"filesGenerated":<number of files>,"success":true}}
[/COMPLETE]

Rules:
- file paths never contain "]"
- file content never contains the literal text "[/FILE]"
- every file is complete, no placeholders
"""

CODE_TYPE_PROMPTS = {
    "react": """Project type: React + TypeScript.
- src/App.tsx only composes components (max 50 lines, no useState/useEffect)
- components live in src/components/layout/, src/components/sections/, src/components/ui/
- required components: Navbar, Footer (layout), Hero, Features (sections), Button, Card (ui)
- Button supports `variant` and `size` props
- styles: src/styles/design-tokens.css (CSS custom properties) and src/styles/globals.css
- shared types in src/types/index.ts, every component has a props interface
- use design tokens via var(--...), never hardcoded colors
""",
    "html": """Project type: static site.
- at least index.html, styles.css and script.js
- no inline <style> or <script> in HTML
- semantic HTML (header, nav, main, section, footer), alt on every image, labels on inputs
- CSS Grid/Flexbox, transitions, hover states, media queries, gradients
""",
}

RETRY_PROMPT = """{prompt}

Previous generation failed quality standards:
{issues}

MANDATORY REQUIREMENTS:
- Use Tailwind CSS for ALL styling (bg-, text-, hover:, etc.)
- Include gradient backgrounds: bg-gradient-to-br from-indigo-900 to-pink-700
- Add glassmorphism: backdrop-blur-md, bg-white/10
- Include smooth animations: transition-all duration-300, hover:scale-105
- Generate minimum 3 separate files
"""


def build_system_prompt(code_type: str) -> str:
    return PROTOCOL_PROMPT.format() + "\n" + CODE_TYPE_PROMPTS.get(code_type, "")


def build_messages(prompt: str, code_type: str) -> list[dict]:
    return [
        {"role": "system", "content": build_system_prompt(code_type)},
        {"role": "user", "content": prompt},
    ]


def build_retry_prompt(prompt: str, issues: list[str]) -> str:
    """Промпт для повторной генерации после проваленной проверки качества."""
    issue_lines = "\n".join(f"- {issue}" for issue in issues) or "- (no details)"
    return RETRY_PROMPT.format(prompt=prompt, issues=issue_lines)
