"""Constants shared by the test modules: keys, digests and project files."""

from __future__ import annotations

# SHA-384 of the single byte b"x".
X_DIGEST = (
    "d752c2c51fba0e29aa190570a9d4253e44077a058d3297fa3a5630d5bd012622"
    "f97c28acaed313b5c83bb990caa7da85"
)

BUNDLE_KEY = "/dist/bundle.js?v=1.0.0"
CSS_KEY = "/css/main.min.css?v=1.0.0"
STALE_DIGEST = "0" * 96

SERVICE_WORKER = f"""\
// Service worker for the test client
const VERSION = "0.0.0";

const RESOURCE_INTEGRITY = {{
  "{BUNDLE_KEY}":
    "{STALE_DIGEST}",
  "{CSS_KEY}":
    "{STALE_DIGEST}",
}};

self.addEventListener("fetch", (event) => {{
  const expected = RESOURCE_INTEGRITY[new URL(event.request.url).pathname];
}});
"""

INDEX_HTML = """\
<!doctype html>
<html>
  <body>
    <span class="version-text" hidden>__APP_VERSION__</span>
    <footer>v__APP_VERSION__</footer>
  </body>
</html>
"""

PROJECT_TOML = f"""\
host_artifact = "service-worker.js"
package_manifest = "package.json"

[resources]
"{BUNDLE_KEY}" = "dist/bundle.js"
"{CSS_KEY}" = "css/main.min.css"

[[version_targets]]
path = "index.html"
placeholder = "__APP_VERSION__"

[[version_targets]]
path = "service-worker.js"
pattern = 'const VERSION = "[^"]*"'
replacement = 'const VERSION = "{{version}}"'

[release]
stage_files = ["package.json", "index.html", "service-worker.js"]
commit_message = "Version bump to {{version}}"
"""


