"""
导出流程集成测试

覆盖端到端场景、解码失败降级、确定性与致命错误
"""

from brawlhalla_lang.core.diagnostics import CONFIG_ENTRY, DECODE, MISSING_VALUE, DiagnosticLog
from brawlhalla_lang.core.pipeline import build_table, export_languages, run_export
from brawlhalla_lang.core.registry import LanguageDescriptor
from brawlhalla_lang.utils.config import ExportConfig
from brawlhalla_lang.utils.logger import DecodeError, FatalConfigError, OutputError

EXPECTED_BOTH = "StringKey\tEnglish\tFrench\nFarewell\t\tAu revoir\nGreeting\tHello\tBonjour"
EXPECTED_FRENCH_BROKEN = "StringKey\tEnglish\tFrench\nGreeting\tHello\t"


def stub_decoder(data):
    """language id -> entries; ids absent from ``data`` fail to decode"""
    def _decode(lang_id):
        if lang_id not in data:
            raise DecodeError(f"no data for {lang_id}")
        return data[lang_id]
    return _decode


class TestExportLanguages:
    """测试 export_languages（不依赖真实语言文件）"""

    def test_end_to_end_scenario(self, tmp_path):
        decoder = stub_decoder({
            1: [("Greeting", "Hello")],
            2: [("Greeting", "Bonjour"), ("Farewell", "Au revoir")],
        })
        out = tmp_path / "out.tsv"
        result = export_languages([("English", "1"), ("French", "2")], decoder, out)

        assert result.ok
        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8") == EXPECTED_BOTH
        assert result.entry_counts == {1: 1, 2: 2}

    def test_decode_failure_leaves_empty_column(self, tmp_path):
        decoder = stub_decoder({1: [("Greeting", "Hello")]})
        out = tmp_path / "out.tsv"
        result = export_languages([("English", "1"), ("French", "2")], decoder, out)

        assert result.ok
        assert out.read_text(encoding="utf-8") == EXPECTED_FRENCH_BROKEN
        decode_diags = result.diagnostics.of_kind(DECODE)
        assert [d.language for d in decode_diags] == ["French"]
        assert [l.name for l in result.failed_languages] == ["French"]

    def test_failure_midway_ingests_nothing(self, tmp_path):
        def decoder(lang_id):
            def gen():
                yield ("Partial", "value")
                raise DecodeError("truncated")
            return gen()

        result = export_languages([("English", "1")], decoder, tmp_path / "out.tsv")
        assert result.ok
        assert len(result.table.rows) == 0

    def test_os_error_from_decoder_is_not_fatal(self, tmp_path):
        def decoder(lang_id):
            raise PermissionError("denied")

        result = export_languages([("English", "1")], decoder, tmp_path / "out.tsv")
        assert result.ok
        assert len(result.diagnostics.of_kind(DECODE)) == 1

    def test_duplicate_id_header_contains_name_once(self, tmp_path):
        decoder = stub_decoder({1: [("A", "a")]})
        out = tmp_path / "out.tsv"
        result = export_languages([("English", "1"), ("Other", "1")], decoder, out)

        header = out.read_text(encoding="utf-8").split("\n")[0].split("\t")
        assert header == ["StringKey", "English"]
        assert len(result.diagnostics.of_kind(CONFIG_ENTRY)) == 1

    def test_zero_languages_gives_key_column_only(self, tmp_path):
        out = tmp_path / "out.tsv"
        result = export_languages([("Template", "0")], stub_decoder({}), out)
        assert result.ok
        assert out.read_bytes() == b"StringKey"

    def test_missing_values_recorded(self, tmp_path):
        decoder = stub_decoder({
            1: [("Greeting", "Hello")],
            2: [("Greeting", "Bonjour"), ("Farewell", "Au revoir")],
        })
        result = export_languages([("English", "1"), ("French", "2")], decoder, tmp_path / "o.tsv")
        missing = result.diagnostics.of_kind(MISSING_VALUE)
        assert [(d.language, d.key) for d in missing] == [("English", "Farewell")]

    def test_deterministic_output(self, tmp_path):
        decoder = stub_decoder({
            1: [("z", "1"), ("B", "2\n3"), ("a", "4")],
            2: [("a", "5"), ("z", "6"), ("Q", "7")],
        })
        decls = [("English", "1"), ("French", "2")]
        first = tmp_path / "first.tsv"
        second = tmp_path / "second.tsv"
        export_languages(decls, decoder, first)
        export_languages(decls, decoder, second)
        assert first.read_bytes() == second.read_bytes()

    def test_output_error_is_returned(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        result = export_languages(
            [("English", "1")], stub_decoder({1: []}), blocker / "out.tsv"
        )
        assert not result.ok
        assert result.exit_code == 1
        assert isinstance(result.error, OutputError)

    def test_config_key_column(self, tmp_path):
        out = tmp_path / "out.tsv"
        config = ExportConfig(key_column="Key")
        export_languages([("English", "1")], stub_decoder({1: []}), out, config)
        assert out.read_bytes() == b"Key\tEnglish"


class TestBuildTable:
    """测试 build_table"""

    def test_languages_decoded_in_registry_order(self):
        calls = []

        def decoder(lang_id):
            calls.append(lang_id)
            return []

        langs = [LanguageDescriptor("B", 5), LanguageDescriptor("A", 2)]
        build_table(langs, decoder, DiagnosticLog())
        assert calls == [5, 2]


class TestRunExport:
    """测试 run_export（真实目录与语言文件）"""

    def test_end_to_end_from_files(self, tmp_path, game_dir, write_lang, write_language_types):
        write_lang(1, [("Greeting", "Hello")])
        write_lang(2, [("Greeting", "Bonjour"), ("Farewell", "Au revoir")])
        xml = write_language_types([("Template", "0"), ("English", "1"), ("French", "2")])
        out = tmp_path / "strings.tsv"

        result = run_export(game_dir, xml, out)

        assert result.ok
        assert out.read_text(encoding="utf-8") == EXPECTED_BOTH

    def test_corrupted_language_file(self, tmp_path, game_dir, write_lang, write_language_types):
        write_lang(1, [("Greeting", "Hello")])
        (game_dir / "languages" / "language.2.bin").write_bytes(b"\x00\x00\x00\x00corrupt")
        xml = write_language_types([("English", "1"), ("French", "2")])
        out = tmp_path / "strings.tsv"

        result = run_export(game_dir, xml, out)

        assert result.ok
        assert out.read_text(encoding="utf-8") == EXPECTED_FRENCH_BROKEN
        assert len(result.diagnostics.of_kind(DECODE)) == 1

    def test_missing_language_file(self, tmp_path, game_dir, write_lang, write_language_types):
        write_lang(1, [("Greeting", "Hello")])
        xml = write_language_types([("English", "1"), ("French", "2")])
        result = run_export(game_dir, xml, tmp_path / "strings.tsv")
        assert result.ok
        assert "Missing language file" in result.diagnostics.of_kind(DECODE)[0].message

    def test_missing_languages_folder_is_fatal(self, tmp_path, write_language_types):
        xml = write_language_types([("English", "1")])
        (tmp_path / "empty_game").mkdir()
        out = tmp_path / "strings.tsv"
        result = run_export(tmp_path / "empty_game", xml, out)
        assert isinstance(result.error, FatalConfigError)
        assert not out.exists()

    def test_missing_language_types_is_fatal(self, tmp_path, game_dir):
        result = run_export(game_dir, tmp_path / "nope.xml", tmp_path / "strings.tsv")
        assert isinstance(result.error, FatalConfigError)
        assert result.exit_code == 1

    def test_wrong_root_element_is_fatal(self, tmp_path, game_dir, write_lang, write_language_types):
        write_lang(1, [("A", "a")])
        xml = write_language_types([("English", "1")], root_tag="Languages")
        out = tmp_path / "strings.tsv"
        result = run_export(game_dir, xml, out)
        assert isinstance(result.error, FatalConfigError)
        assert not out.exists()

    def test_custom_languages_dir(self, tmp_path, lang_bytes, write_language_types):
        root = tmp_path / "game"
        (root / "loc").mkdir(parents=True)
        (root / "loc" / "language.1.bin").write_bytes(lang_bytes([("A", "a")]))
        xml = write_language_types([("English", "1")])
        out = tmp_path / "strings.tsv"
        result = run_export(root, xml, out, ExportConfig(languages_dir_name="loc"))
        assert result.ok
        assert out.read_bytes() == b"StringKey\tEnglish\nA\ta"
