"""Built-in preset definitions for common project types."""

from typing import Dict

from .preset import Preset

_NODE_EXCLUDES = (
    "node_modules",
    "npm-debug.log",
    "yarn-error.log",
    "yarn-debug.log",
    "package-lock.json",
    "yarn.lock",
    "dist",
    "build",
)

BUILT_IN_PRESETS: Dict[str, Preset] = {
    preset.name: preset
    for preset in (
        Preset(
            name="python",
            suffixes=(".py", ".pyi", ".pyx", ".ipynb"),
            include=("*.py", "*.pyi", "*.pyx", "*.ipynb"),
            exclude=(
                "__pycache__",
                "*.pyc",
                "*.pyo",
                "*.pyd",
                "build",
                "dist",
                "*.egg-info",
                "venv",
                ".pytest_cache",
            ),
        ),
        Preset(
            name="javascript",
            suffixes=(".js", ".mjs", ".cjs", ".jsx"),
            include=("*.js", "*.mjs", "*.cjs", "*.jsx"),
            exclude=_NODE_EXCLUDES,
        ),
        Preset(
            name="typescript",
            suffixes=(".ts", ".tsx"),
            include=("*.ts", "*.tsx"),
            exclude=_NODE_EXCLUDES,
        ),
        Preset(
            name="web",
            suffixes=(".html", ".css", ".scss", ".sass", ".less", ".vue"),
            include=("*.html", "*.css", "*.scss", "*.sass", "*.less", "*.vue"),
            exclude=("node_modules", "bower_components", "dist", "build", ".cache"),
        ),
        Preset(
            name="java",
            suffixes=(".java",),
            include=("*.java",),
            exclude=("target", ".gradle", "build", "out"),
        ),
        Preset(
            name="csharp",
            suffixes=(".cs", ".csx", ".csproj"),
            include=("*.cs", "*.csx", "*.csproj"),
            exclude=("bin", "obj", "*.suo", "*.user", "*.userosscache", "*.sln.docstates"),
        ),
        Preset(name="go", suffixes=(".go",), include=("*.go",), exclude=("vendor",)),
        Preset(
            name="ruby",
            suffixes=(".rb", ".rake", ".gemspec"),
            include=("*.rb", "*.rake", "*.gemspec"),
            exclude=(".bundle", "vendor/bundle"),
        ),
        Preset(name="php", suffixes=(".php",), include=("*.php",), exclude=("vendor", "composer.lock")),
        Preset(name="rust", suffixes=(".rs",), include=("*.rs",), exclude=("target", "Cargo.lock")),
        Preset(name="swift", suffixes=(".swift",), include=("*.swift",), exclude=(".build", "Packages")),
        Preset(
            name="kotlin",
            suffixes=(".kt", ".kts"),
            include=("*.kt", "*.kts"),
            exclude=(".gradle", "build", "out"),
        ),
        Preset(
            name="scala",
            suffixes=(".scala", ".sc"),
            include=("*.scala", "*.sc"),
            exclude=(".bloop", ".metals", "target"),
        ),
        Preset(
            name="docker",
            suffixes=(".dockerfile", ".dockerignore"),
            prefixes=("Dockerfile",),
            include=(
                "Dockerfile",
                "Dockerfile.*",
                ".dockerignore",
                "docker-compose.yml",
                "docker-compose.yaml",
            ),
            exclude=(),
        ),
        Preset(
            name="misc",
            suffixes=(".md", ".txt", ".json", ".xml", ".yml", ".yaml", ".ini", ".cfg", ".conf", ".toml"),
            include=("*.md", "*.txt", "*.json", "*.xml", "*.yml", "*.yaml", "*.ini", "*.cfg", "*.conf", "*.toml"),
            exclude=(),
        ),
    )
}
