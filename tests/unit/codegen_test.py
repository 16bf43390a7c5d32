"""Unit tests for the generation registry and file serialization."""

from pathlib import Path

from annogen.codegen import GenerationContext, include_line, render_file, write_files
from annogen.models import GeneratedFile, Variable


class TestGenerationContext:
    def test_file_is_created_lazily(self) -> None:
        context = GenerationContext()
        assert "out.gen" not in context

        generated = context.file("out.gen")

        assert "out.gen" in context
        assert context.file("out.gen") is generated

    def test_two_handlers_accumulate_into_one_body(self) -> None:
        context = GenerationContext()

        def first_handler(ctx: GenerationContext) -> None:
            ctx.file("LuaBindings.cpp.gen").function("CreateBindings").body.append("register_type();")

        def second_handler(ctx: GenerationContext) -> None:
            ctx.function("LuaBindings.cpp.gen", "CreateBindings").body.append("register_member();")

        first_handler(context)
        second_handler(context)

        function = context.function("LuaBindings.cpp.gen", "CreateBindings")
        assert function.body == ["register_type();", "register_member();"]


class TestRenderFile:
    def test_duplicate_includes_render_once(self) -> None:
        generated = GeneratedFile()
        for include in ("b.h", "a.h", "a.h"):
            generated.add_include(include)

        text = render_file(generated)

        include_lines = [line for line in text.splitlines() if line.startswith("#include")]
        assert len(include_lines) == 2
        assert include_lines[0].endswith('/a.h"')
        assert include_lines[1].endswith('/b.h"')

    def test_render_is_stable(self) -> None:
        generated = GeneratedFile()
        for include in ("/z/b.h", "/z/a.h", "/z/c.h"):
            generated.add_include(include)
        assert render_file(generated) == render_file(generated.model_copy(deep=True))

    def test_full_layout(self) -> None:
        generated = GeneratedFile()
        generated.add_include("/src/Foo.h")
        generated.header.append("#include <sol/sol.hpp>")
        function = generated.function("CreateBindings")
        function.header.add_parameter(Variable(type="sol::state&", name="lua_state"))
        function.header.add_parameter(Variable(type="int", name="flags"))
        function.body.extend(["    a();", "    b();"])

        assert render_file(generated) == (
            '#include "/src/Foo.h"\n'
            "\n"
            "#include <sol/sol.hpp>\n"
            "\n"
            "void CreateBindings(sol::state& lua_state, int flags)\n"
            "{\n"
            "    a();\n"
            "    b();\n"
            "}\n"
            "\n"
        )

    def test_function_is_named_after_its_key(self) -> None:
        generated = GeneratedFile()
        function = generated.function("Init")
        function.header.name = "SomethingElse"
        function.header.return_type = "bool"

        assert "bool Init()\n{\n}\n" in render_file(generated)

    def test_prefix_is_emitted_verbatim(self) -> None:
        generated = GeneratedFile()
        function = generated.function("Register")
        function.prefix = "template <typename T>\n"
        function.header.add_parameter(Variable(type="T&", name="value"))

        assert "template <typename T>\nvoid Register(T& value)\n{\n}\n" in render_file(generated)

    def test_functions_keep_creation_order(self) -> None:
        generated = GeneratedFile()
        generated.function("Second")
        generated.function("First")
        generated.function("Second")

        text = render_file(generated)
        assert text.index("Second(") < text.index("First(")

    def test_empty_file_has_two_separator_lines(self) -> None:
        assert render_file(GeneratedFile()) == "\n\n"

    def test_include_line_format(self) -> None:
        assert include_line(Path("/abs/path/Foo.h")) == '#include "/abs/path/Foo.h"'

    def test_string_includes_are_normalized(self) -> None:
        generated = GeneratedFile()
        generated.includes.add("/abs/b.h")  # type: ignore[arg-type]
        generated.add_include("/abs/a.h")
        generated.add_include("/abs/b.h")

        include_lines = [line for line in render_file(generated).splitlines() if line.startswith("#include")]

        assert include_lines == ['#include "/abs/a.h"', '#include "/abs/b.h"']


class TestWriteFiles:
    def test_writes_nested_paths(self, tmp_path: Path) -> None:
        context = GenerationContext()
        context.function("bindings/lua/LuaBindings.cpp.gen", "CreateBindings").body.append("x();")

        report = write_files(context, tmp_path)

        output = tmp_path / "bindings" / "lua" / "LuaBindings.cpp.gen"
        assert report.written == [output]
        assert report.ok is True
        assert "x();" in output.read_text(encoding="utf-8")

    def test_unwritable_file_is_skipped(self, tmp_path: Path) -> None:
        (tmp_path / "blocked.gen").mkdir()
        context = GenerationContext()
        context.function("blocked.gen", "F").body.append("a();")
        context.function("fine.gen", "G").body.append("b();")

        report = write_files(context, tmp_path)

        assert report.ok is False
        assert [path.name for path, _ in report.failed] == ["blocked.gen"]
        assert report.written == [tmp_path / "fine.gen"]
        assert (tmp_path / "fine.gen").is_file()

    def test_existing_files_are_overwritten(self, tmp_path: Path) -> None:
        (tmp_path / "out.gen").write_text("stale", encoding="utf-8")
        context = GenerationContext()
        context.file("out.gen").header.append("// fresh")

        write_files(context, tmp_path)

        assert (tmp_path / "out.gen").read_text(encoding="utf-8") == "\n// fresh\n\n"
