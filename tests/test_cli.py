# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pytest

import rsacore
from rsacore import __main__ as cli

pytestmark = pytest.mark.filterwarnings("ignore:Per-byte RSA encryption:RuntimeWarning")


@pytest.fixture
def key_paths(tmp_path):
    return tmp_path / "key.pub", tmp_path / "key"


@pytest.fixture
def textbook_files(key_paths, textbook_pair):
    pub, priv = key_paths
    pub.write_text(rsacore.format_public_key(textbook_pair.public_key) + "\n", encoding="ascii")
    priv.write_text(rsacore.format_private_key(textbook_pair.private_key) + "\n", encoding="ascii")
    return key_paths


def feed_input(monkeypatch, answers):
    answers = iter(answers)
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(answers))


def test_keygen_from_primes(key_paths, textbook_pair):
    pub, priv = key_paths
    cli.main(["-n", "keygen", "-p", str(pub), "-P", str(priv), "--p", "61", "--q", "53"])
    pair = rsacore.KeyPair(rsacore.parse_public_key(pub.read_text()), rsacore.parse_private_key(priv.read_text()))
    assert pair.public_key.n == 3233
    e, d = pair.public_key.e, pair.private_key.d
    assert (e * d) % 3120 == 1
    assert pub.read_text().endswith("-----END RSA PUBLIC KEY-----\n")


def test_keygen_from_bits(key_paths):
    pub, priv = key_paths
    cli.main(["-n", "keygen", "-p", str(pub), "-P", str(priv), "--bits", "512"])
    pub_key = rsacore.parse_public_key(pub.read_text())
    priv_key = rsacore.parse_private_key(priv.read_text())
    assert pub_key.n == priv_key.n
    assert pub_key.n.bit_length() in (511, 512)


def test_keygen_keeps_existing(textbook_files, capsys):
    pub, priv = textbook_files
    before = pub.read_text()
    cli.main(["-n", "keygen", "-p", str(pub), "-P", str(priv), "--p", "5", "--q", "7"])
    assert pub.read_text() == before
    assert "already exists" in capsys.readouterr().out


def test_keygen_overwrite(textbook_files):
    pub, priv = textbook_files
    cli.main(["-n", "keygen", "-p", str(pub), "-P", str(priv), "--p", "5", "--q", "7", "-o"])
    assert rsacore.parse_public_key(pub.read_text()).n == 35


def test_keygen_not_prime(key_paths, capsys):
    pub, priv = key_paths
    with pytest.raises(SystemExit) as exc:
        cli.main(["-n", "keygen", "-p", str(pub), "-P", str(priv), "--p", "61", "--q", "51"])
    assert exc.value.code == 1
    assert "51 is not a prime number" in capsys.readouterr().err
    assert not pub.exists()


def test_keygen_same_primes(key_paths, capsys):
    pub, priv = key_paths
    with pytest.raises(SystemExit) as exc:
        cli.main(["-n", "keygen", "-p", str(pub), "-P", str(priv), "--p", "61", "--q", "61"])
    assert exc.value.code == 1
    assert "distinct" in capsys.readouterr().err
    assert not priv.exists()


def test_encrypt_decrypt(textbook_files, capsys):
    pub, priv = textbook_files
    cli.main(["-n", "encrypt", "-p", str(pub), "--message", "Hi there!"])
    token = capsys.readouterr().out.strip()
    cli.main(["-n", "decrypt", "-P", str(priv), "--message", token])
    assert capsys.readouterr().out == "Hi there!\n"


def test_encrypt_modulus_too_small(key_paths, capsys):
    pub, priv = key_paths
    cli.main(["-n", "keygen", "-p", str(pub), "-P", str(priv), "--p", "2", "--q", "5"])
    assert rsacore.parse_public_key(pub.read_text()).n == 10
    with pytest.raises(SystemExit) as exc:
        cli.main(["-n", "encrypt", "-p", str(pub), "--message", "Hi"])
    assert exc.value.code == 1
    assert capsys.readouterr().err.startswith("Error: Message representative")


def test_encrypt_from_file(textbook_files, tmp_path, capsys):
    pub, priv = textbook_files
    payload = tmp_path / "payload.txt"
    payload.write_text("From a file.", encoding="utf-8")
    cli.main(["-n", "encrypt", "-p", str(pub), "--message", f"P:{payload}"])
    token = capsys.readouterr().out.strip()
    assert rsacore.decrypt(token, rsacore.parse_private_key(priv.read_text())) == "From a file."


def test_decrypt_failure(textbook_files, capsys):
    _, priv = textbook_files
    with pytest.raises(SystemExit) as exc:
        cli.main(["-n", "decrypt", "-P", str(priv), "--message", "@@@@"])
    assert exc.value.code == 1
    assert capsys.readouterr().err.startswith("Error:")


def test_decrypt_with_public_key_file(textbook_files):
    pub, _ = textbook_files
    with pytest.raises(SystemExit):
        cli.main(["-n", "decrypt", "-P", str(pub), "--message", "Mjc5MA=="])


def test_export(textbook_files, capsys):
    pub, _ = textbook_files
    cli.main(["-n", "export", "-p", str(pub)])
    out = capsys.readouterr().out
    assert out.startswith("-----BEGIN RSA PUBLIC KEY-----\n")
    assert rsacore.from_pkcs1_pem(out) == rsacore.PublicKey(17, 3233)


def test_noninteractive_missing_argument():
    with pytest.raises(IOError, match="public_key"):
        cli.main(["-n", "export"])


def test_interactive_keygen(monkeypatch, key_paths, capsys):
    pub, priv = key_paths
    feed_input(monkeypatch, ["keygen", str(pub), str(priv), "nonsense", "primes", "sixty-one", "61", "53"])
    cli.main([])
    out = capsys.readouterr().out
    assert "Welcome to rsacore!" in out
    assert "Please select an option from the list." in out
    assert "We could not convert your value" in out
    assert "Goodbye!" in out
    assert rsacore.parse_public_key(pub.read_text()).n == 3233


def test_interactive_defaults(monkeypatch, textbook_files, capsys):
    pub, priv = textbook_files
    # Enter accepts the default encoding in advanced mode.
    feed_input(monkeypatch, ["Hi", ""])
    cli.main(["-a", "encrypt", "-p", str(pub)])
    token = capsys.readouterr().out.strip().splitlines()[-3]
    assert rsacore.decrypt(token, rsacore.parse_private_key(priv.read_text())) == "Hi"


def test_verbosity(mocker):
    basic = mocker.patch("rsacore.__main__.logging.basicConfig")
    for count, level in ((0, cli.logging.WARNING), (1, cli.logging.INFO), (3, cli.logging.DEBUG)):
        cli.setup_logging(count)
        assert basic.call_args.kwargs["level"] == level


def test_version(capsys):
    with pytest.raises(SystemExit):
        cli.main(["--version"])
    assert rsacore.__version__ in capsys.readouterr().out
