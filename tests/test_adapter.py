import json

import pytest

from vibe_codegen.parsing import GeneratedFile
from vibe_codegen.sandbox import AdapterError, SandboxBundle, SandboxTemplate, adapt, normalize_path

APP = "import React from 'react';\nexport default function App() { return <div>Hi</div>; }"
MAIN = "import { createRoot } from 'react-dom/client';\nimport App from './App';"


def files(*pairs):
    return [GeneratedFile(path=path, content=content) for path, content in pairs]


class TestAdaptErrors:
    @pytest.mark.parametrize("value", [None, []])
    def test_no_files(self, value):
        result = adapt(value)
        assert isinstance(result, AdapterError)
        assert result.error == "No files were generated"

    def test_not_iterable(self):
        result = adapt(42)
        assert isinstance(result, AdapterError)
        assert "int" in result.details

    def test_malformed_entry(self):
        result = adapt([{"path": "a.js"}])
        assert isinstance(result, AdapterError)
        assert result.error == "Malformed file at position 0"

    def test_empty_path(self):
        result = adapt([{"path": "/", "content": "x"}])
        assert isinstance(result, AdapterError)

    def test_protected_config(self):
        result = adapt(files(("sandbox.config.json", "{}"), ("index.html", "<p>x</p>")))
        assert isinstance(result, AdapterError)
        assert "/sandbox.config.json" in result.error

    def test_duplicate_after_normalisation(self):
        result = adapt(files(("a.js", "1"), ("/a.js", "2")))
        assert isinstance(result, AdapterError)
        assert result.error == "Duplicate file path: /a.js"


class TestReactProjects:
    def test_template_and_scaffolding(self):
        bundle = adapt(files(("src/App.tsx", APP), ("src/main.tsx", MAIN)))
        assert isinstance(bundle, SandboxBundle)
        assert bundle.template == SandboxTemplate.REACT_TS
        assert bundle.entry == "/src/main.tsx"
        assert bundle.dependencies == {"react": "^18.3.1", "react-dom": "^18.3.1"}
        assert set(bundle.files) == {
            "/src/App.tsx", "/src/main.tsx", "/index.html", "/package.json", "/sandbox.config.json",
        }
        assert bundle.files["/src/App.tsx"] == {"code": APP}

    def test_generated_package_json(self):
        bundle = adapt(files(("src/App.tsx", APP)))
        package = json.loads(bundle.files["/package.json"]["code"])
        assert package["dependencies"]["react"] == "^18.3.1"
        assert bundle.entry == "/src/App.tsx"

    def test_user_manifest_wins(self):
        manifest = '{"dependencies": {"react": "^18.2.0"}, "devDependencies": {"vite": "^5.0.0"}}'
        bundle = adapt(files(("package.json", manifest), ("src/App.tsx", APP)))
        assert bundle.dependencies == {"react": "^18.2.0", "vite": "^5.0.0"}
        assert bundle.files["/package.json"] == {"code": manifest}

    def test_malformed_manifest_uses_defaults(self):
        bundle = adapt(files(("package.json", "{not json"), ("src/App.tsx", APP)))
        assert bundle.dependencies == {"react": "^18.3.1", "react-dom": "^18.3.1"}

    def test_react_detected_by_import(self):
        bundle = adapt(files(("widget.jsx", "import { useState } from 'react';")))
        assert bundle.template == SandboxTemplate.REACT_TS
        assert bundle.entry == "/widget.jsx"

    def test_existing_index_html_kept(self):
        bundle = adapt(files(("public/index.html", "<div id='root'></div>"), ("src/main.tsx", MAIN)))
        assert "/index.html" not in bundle.files


class TestOtherTemplates:
    def test_static_site(self):
        bundle = adapt(files(("index.html", "<p>x</p>"), ("styles.css", "p {}")))
        assert bundle.template == SandboxTemplate.STATIC
        assert bundle.entry == "/index.html"
        assert "/package.json" not in bundle.files

    def test_vanilla_typescript(self):
        bundle = adapt(files(("index.html", "<p>x</p>"), ("src/app.ts", "console.log(1);")))
        assert bundle.template == SandboxTemplate.VANILLA_TS

    def test_every_input_file_kept(self):
        source = files(("index.html", "<p>x</p>"), ("css/site.css", "p {}"), ("/js/app.js", "1"))
        bundle = adapt(source)
        assert {"/index.html", "/css/site.css", "/js/app.js"} <= set(bundle.files)

    def test_accepts_dicts(self):
        bundle = adapt([{"path": "index.html", "content": "<p>x</p>"}])
        assert bundle.files["/index.html"] == {"code": "<p>x</p>"}

    def test_renderer_payload(self):
        payload = adapt(files(("index.html", "<p>x</p>"))).to_renderer_payload()
        assert payload["template"] == "static"
        assert payload["entry"] == "/index.html"
        assert json.loads(payload["files"]["/sandbox.config.json"]["code"])["template"] == "static"


class TestNormalizePath:
    @pytest.mark.parametrize("path,expected", [
        ("src/App.tsx", "/src/App.tsx"),
        ("/src/App.tsx", "/src/App.tsx"),
        ("index.html", "/index.html"),
    ])
    def test_leading_slash(self, path, expected):
        assert normalize_path(path) == expected
