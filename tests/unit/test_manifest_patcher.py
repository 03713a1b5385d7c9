"""Tests for locating, parsing and patching the embedded manifest."""

from __future__ import annotations

import json

import pytest

from swintegrity.core.manifest_patcher import (
    ManifestAmbiguousError,
    ManifestNotFoundError,
    extract_digest,
    locate_manifest,
    parse_manifest,
    patch_manifest,
    serialize_manifest,
)
from tests._data import BUNDLE_KEY, CSS_KEY, SERVICE_WORKER, STALE_DIGEST, X_DIGEST

A = "a" * 96


class TestLocate:
    def test_locates_object_literal(self):
        span = locate_manifest(SERVICE_WORKER)
        assert span.body.startswith("{")
        assert span.body.endswith("}")
        assert BUNDLE_KEY in span.body
        assert SERVICE_WORKER[span.start : span.end] == span.body

    def test_missing_fence_raises(self):
        with pytest.raises(ManifestNotFoundError):
            locate_manifest("const SOMETHING_ELSE = {};")

    def test_reference_without_assignment_is_not_a_fence(self):
        with pytest.raises(ManifestNotFoundError):
            locate_manifest("const x = RESOURCE_INTEGRITY[key];")

    def test_two_fences_are_ambiguous(self):
        text = "const RESOURCE_INTEGRITY = {};\nlet RESOURCE_INTEGRITY = {};\n"
        with pytest.raises(ManifestAmbiguousError):
            locate_manifest(text)

    def test_custom_name(self):
        span = locate_manifest('const SRI = {"/a": "b"};', name="SRI")
        assert span.body == '{"/a": "b"}'


class TestSerialize:
    def test_one_pair_per_line(self):
        text = serialize_manifest({"/a": A, "/b": X_DIGEST})
        assert text.splitlines() == [
            "{",
            f'  "/a": "{A}",',
            f'  "/b": "{X_DIGEST}"',
            "}",
        ]

    def test_is_valid_json(self):
        mapping = {"/a": A, "/b": X_DIGEST}
        assert json.loads(serialize_manifest(mapping)) == mapping

    def test_empty_manifest(self):
        assert serialize_manifest({}) == "{}"


class TestPatch:
    def test_replaces_only_the_span(self):
        patched = patch_manifest(SERVICE_WORKER, {BUNDLE_KEY: X_DIGEST})
        before, _, after = SERVICE_WORKER.partition("const RESOURCE_INTEGRITY = ")
        assert patched.startswith(before + "const RESOURCE_INTEGRITY = {")
        tail = SERVICE_WORKER[locate_manifest(SERVICE_WORKER).end :]
        assert patched.endswith(tail)
        assert STALE_DIGEST not in patched

    def test_patch_then_parse(self):
        mapping = {BUNDLE_KEY: X_DIGEST, CSS_KEY: A}
        assert parse_manifest(patch_manifest(SERVICE_WORKER, mapping)) == mapping

    def test_empty_manifest_can_be_patched_again(self):
        emptied = patch_manifest(SERVICE_WORKER, {})
        refilled = patch_manifest(emptied, {BUNDLE_KEY: X_DIGEST})
        assert parse_manifest(refilled) == {BUNDLE_KEY: X_DIGEST}

    def test_missing_fence_raises(self):
        with pytest.raises(ManifestNotFoundError):
            patch_manifest("// nothing here\n", {BUNDLE_KEY: X_DIGEST})


class TestParse:
    def test_hand_wrapped_layout_with_trailing_comma(self):
        assert parse_manifest(SERVICE_WORKER) == {
            BUNDLE_KEY: STALE_DIGEST,
            CSS_KEY: STALE_DIGEST,
        }

    def test_malformed_digest_ignored(self):
        text = 'const RESOURCE_INTEGRITY = { "/a": "short", "/b": "%s" };' % A
        assert parse_manifest(text) == {"/b": A}

    def test_extract_digest(self):
        assert extract_digest(SERVICE_WORKER, BUNDLE_KEY) == STALE_DIGEST

    def test_extract_digest_is_exact_key_match(self):
        text = 'const RESOURCE_INTEGRITY = { "/dist/bundle.js?v=1.0.0.1": "%s" };' % A
        assert extract_digest(text, BUNDLE_KEY) is None

    def test_extract_missing_key(self):
        assert extract_digest(SERVICE_WORKER, "/nope") is None
