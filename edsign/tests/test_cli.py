"""Tests for the edsign command line."""

import base64

import nacl.signing
import pytest
from click.testing import CliRunner

from edsign import __version__
from edsign.cli.main import cli
from edsign.config import EdSignConfig


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, config, workdir):
    def _invoke(*args):
        return runner.invoke(cli, list(args), obj=config)
    return _invoke


def test_no_mode_prints_help(invoke):
    result = invoke()
    assert result.exit_code == 0
    assert "--sign" in result.output
    assert "--verify" in result.output
    assert "--create" in result.output


def test_version(invoke):
    result = invoke("--version")
    assert result.exit_code == 0
    assert __version__ in result.output


def test_create(invoke, config):
    result = invoke("-c")
    assert result.exit_code == 0
    assert "Key pair generated successfully." in result.output
    assert f"Private key file created: {config.private_key_path}" in result.output
    assert f"Public key file created: {config.public_key_path}" in result.output
    assert len(config.private_key_path.read_bytes()) == 64
    assert len(config.public_key_path.read_bytes()) == 32


def test_create_refuses_existing_keys(invoke, config):
    assert invoke("--create").exit_code == 0
    public_key = config.public_key_path.read_bytes()

    result = invoke("--create")
    assert result.exit_code == 1
    assert "Error: Key file already exists" in result.output
    assert config.public_key_path.read_bytes() == public_key

    result = invoke("--create", "--force")
    assert result.exit_code == 0
    assert config.public_key_path.read_bytes() != public_key


def test_hello_scenario(invoke, config, workdir):
    assert invoke("-c").exit_code == 0
    (workdir / "hello.txt").write_bytes(b"hello")

    result = invoke("-s", "hello.txt")
    assert result.exit_code == 0
    assert "Signed file: hello.txt" in result.output

    seed = config.private_key_path.read_bytes()[:32]
    expected = nacl.signing.SigningKey(seed).sign(b"hello").signature
    assert (workdir / "hello.txt.sig").read_text() == base64.b64encode(expected).decode()

    result = invoke("-v", "hello.txt")
    assert result.exit_code == 0
    assert "Signature of hello.txt is valid" in result.output


def test_sign_glob_with_comment(invoke, workdir):
    invoke("-c")
    for name in ("a.txt", "b.txt", "c.md"):
        (workdir / name).write_text(name)

    result = invoke("--sign", "*.txt", "nightly build")
    assert result.exit_code == 0
    assert result.output.index("Signed file: a.txt") < result.output.index("Signed file: b.txt")
    assert not (workdir / "c.md.sig").exists()
    assert (workdir / "a.txt.sig").read_text().endswith(" nightly build")

    result = invoke("--verify", "*.txt")
    assert result.exit_code == 0
    assert "Signature of a.txt is valid" in result.output
    assert "Signature of b.txt is valid" in result.output


def test_sign_with_explicit_key(runner, tmp_path, workdir, config):
    other_keys = tmp_path / "other"
    assert runner.invoke(cli, ["-c"], obj=config).exit_code == 0

    other = EdSignConfig.for_directory(other_keys)
    assert runner.invoke(cli, ["-c"], obj=other).exit_code == 0

    (workdir / "doc.txt").write_text("doc")
    result = runner.invoke(cli, ["-s", "doc.txt", "", str(other.private_key_path)], obj=config)
    assert result.exit_code == 0
    # Empty comment leaves no trailing space
    assert not (workdir / "doc.txt.sig").read_text().endswith(" ")

    result = runner.invoke(cli, ["-v", "doc.txt"], obj=config)
    assert "Signature of doc.txt is invalid" in result.output
    assert result.exit_code == 0

    result = runner.invoke(cli, ["-v", "doc.txt", str(other.public_key_path)], obj=config)
    assert "Signature of doc.txt is valid" in result.output


def test_verify_tampered(invoke, workdir):
    invoke("-c")
    (workdir / "doc.txt").write_bytes(b"abc")
    invoke("-s", "doc.txt")
    (workdir / "doc.txt").write_bytes(b"abd")

    result = invoke("-v", "doc.txt")
    assert result.exit_code == 0
    assert "Signature of doc.txt is invalid" in result.output


def test_verify_directory(invoke, workdir):
    invoke("-c")
    (workdir / "dist").mkdir()
    (workdir / "dist" / "one.bin").write_bytes(b"1")
    (workdir / "dist" / "two.bin").write_bytes(b"2")
    assert invoke("-s", "dist/*").exit_code == 0

    result = invoke("-v", "dist")
    assert result.exit_code == 0
    assert "Signature of dist/one.bin is valid" in result.output
    assert "Signature of dist/two.bin is valid" in result.output


def test_sign_missing_file(invoke):
    invoke("-c")
    result = invoke("-s", "missing.txt")
    assert result.exit_code == 1
    assert "Error: File not found: missing.txt" in result.output


def test_verify_missing_file(invoke):
    invoke("-c")
    result = invoke("-v", "missing.txt")
    assert result.exit_code == 1
    assert "Error: File not found: missing.txt" in result.output


def test_sign_without_keys(invoke, workdir):
    (workdir / "doc.txt").write_text("doc")
    result = invoke("-s", "doc.txt")
    assert result.exit_code == 1
    assert "Error: Private key file not found" in result.output


def test_verify_malformed_signature(invoke, workdir):
    invoke("-c")
    (workdir / "doc.txt").write_text("doc")
    (workdir / "doc.txt.sig").write_text("!!!")
    result = invoke("-v", "doc.txt")
    assert result.exit_code == 1
    assert "Error: Invalid signature encoding" in result.output


def test_verify_batch_fail_fast(invoke, workdir):
    invoke("-c")
    for name in ("a.txt", "b.txt", "c.txt"):
        (workdir / name).write_text(name)
    invoke("-s", "a.txt")
    invoke("-s", "c.txt")

    result = invoke("-v", "*.txt")
    assert result.exit_code == 1
    assert "Signature of a.txt is valid" in result.output
    assert "Error: Signature file not found" in result.output
    assert "c.txt" not in result.output


def test_verify_batch_keep_going(invoke, workdir):
    invoke("-c")
    for name in ("a.txt", "b.txt", "c.txt"):
        (workdir / name).write_text(name)
    invoke("-s", "a.txt")
    invoke("-s", "c.txt")

    result = invoke("--keep-going", "-v", "*.txt")
    assert result.exit_code == 1
    assert "Signature of a.txt is valid" in result.output
    assert "Signature of c.txt is valid" in result.output
    assert "1 of 3 file(s) failed" in result.output


def test_sign_takes_precedence(invoke, workdir):
    invoke("-c")
    (workdir / "doc.txt").write_text("doc")
    result = invoke("-s", "-v", "doc.txt")
    assert result.exit_code == 0
    assert "Signed file: doc.txt" in result.output


def test_sign_requires_pattern(invoke):
    result = invoke("-s")
    assert result.exit_code == 2


def test_verify_too_many_arguments(invoke):
    result = invoke("-v", "a", "b", "c")
    assert result.exit_code == 2


def test_create_existing_keys_suggests_force(invoke):
    invoke("-c")
    result = invoke("-c")
    assert result.exit_code == 1
    assert "(use --force to overwrite)" in result.output


def test_sign_undecodable_comment(invoke, workdir):
    invoke("-c")
    (workdir / "a.txt").write_text("a")
    result = invoke("-s", "a.txt", "bad\udcff")
    assert result.exit_code == 1
    assert "Error: Comment is not valid UTF-8 text" in result.output
    assert not (workdir / "a.txt.sig").exists()


def test_comment_starting_with_dash_after_separator(invoke, workdir):
    invoke("-c")
    (workdir / "a.txt").write_text("a")
    result = invoke("-s", "--", "a.txt", "-rc1")
    assert result.exit_code == 0
    assert (workdir / "a.txt.sig").read_text().endswith(" -rc1")


def test_help_mentions_separator(invoke):
    result = invoke("--help")
    assert 'edsign -s -- "*.tar.gz" -rc1' in result.output
