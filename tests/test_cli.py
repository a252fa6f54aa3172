from click.testing import CliRunner

from jsx2overreact.cli import main


def test_cli_reads_stdin():
    runner = CliRunner()
    result = runner.invoke(main, [], input="<div>hi</div>")
    assert result.exit_code == 0
    assert result.output.strip() == "Dom.div()(\n  'hi'\n)"


def test_cli_reads_file(tmp_path):
    source = tmp_path / "app.jsx"
    source.write_text('<Foo bar="baz" />\n', encoding="utf-8")

    result = CliRunner().invoke(main, [str(source), "--indent-width", "4"])
    assert result.exit_code == 0
    assert result.output.strip() == "(Foo()\n    ..bar = 'baz'\n)()"


def test_cli_config_file(tmp_path):
    config = tmp_path / "settings.toml"
    config.write_text('[render]\nfragment_name = "Frag"\n', encoding="utf-8")

    result = CliRunner().invoke(main, ["--config", str(config)], input="<><br /></>")
    assert result.exit_code == 0
    assert result.output.strip() == "Frag()(\n  Dom.br()()\n)"


def test_cli_placeholders():
    runner = CliRunner()
    strict = runner.invoke(main, ["--strict"], input="class A {}")
    assert strict.exit_code == 1
    assert "class_declaration" in strict.output

    lenient = runner.invoke(main, ["--placeholders"], input="class A {}")
    assert lenient.exit_code == 0
    assert "/* unsupported: class_declaration */" in lenient.output


def test_cli_parse_error():
    result = CliRunner().invoke(main, [], input="<div>")
    assert result.exit_code == 1
    assert "Error" in result.output


def test_cli_plain_text_ignores_final_newline():
    result = CliRunner().invoke(main, [], input="hello\n")
    assert result.exit_code == 0
    assert result.output == "'hello'\n"


def test_cli_debug_logging(caplog):
    result = CliRunner().invoke(main, ["--debug"], input="<br />")
    assert result.exit_code == 0
    assert "Converted source" in caplog.text
