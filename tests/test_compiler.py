import pytest
from sdfsplice import IdAllocator, SceneBuilder, TemplateCompiler, LineOutput, StreamOutput, compile_template, evaluate
from sdfsplice.compiler import parse_directive, validate_tree, DEFAULT_TEMPLATE
from sdfsplice.demo import main as demo_scene
from tests.conftest import requires_glsl_validator


def test_parse_directive():
    assert parse_directive("#evaluate <sdf>") == ("sdf", 0)
    assert parse_directive("\t\t#evaluate <normal>  ") == ("normal", 2)
    assert parse_directive("#evaluate   <color>\r") == ("color", 0)
    assert parse_directive("  #evaluate <sdf>") == (None, 0)
    assert parse_directive("#evaluate sdf") == (None, 0)
    assert parse_directive("float x = 1.0; #evaluate <sdf>") == (None, 0)


def test_template_without_directives_is_unchanged(builder):
    template = "#version 330 core\n\tfloat x = 1.0;\n  #evaluate <sdf>\n// #evaluate <sdf>\n\n"
    assert compile_template(builder.sphere(1), template) == template


def test_directive_is_replaced_with_declarations_and_alias(builder):
    s = builder.sphere(0.5)
    out = compile_template(s, "void f() {\n\t#evaluate <sdf>\n}")
    assert out.split("\n") == [
        "void f() {",
        "\tfloat sdf0 = length(point - vec3(0.0, 0.0, 0.0)) - 0.5;",
        "\tfloat sdf = sdf0;",
        "}",
    ]


def test_indentation_is_restored_after_directive(builder):
    out = compile_template(builder.sphere(1), "\t\t#evaluate <color>\nnext")
    lines = out.split("\n")
    assert lines[0].startswith("\t\tvec3 color0 = ")
    assert lines[1] == "\t\tvec3 color = color0;"
    assert lines[2] == "next"


def test_unknown_property_becomes_comment(builder):
    out = compile_template(builder.sphere(1), "a\n\t#evaluate <depth>\n#evaluate <sdf>")
    lines = out.split("\n")
    assert lines[:2] == ["a", "\t/* unknown property: depth */"]
    assert lines[-1] == "float sdf = sdf0;"


def test_unsupported_property_does_not_abort(builder):
    bg = builder.backdrop((0.1, 0.2, 0.3))
    out = compile_template(bg, "\t#evaluate <sdf>\n\t#evaluate <color>")
    assert out.split("\n") == [
        "\t/* error: property sdf not supported by Material */",
        "\tvec3 color0 = vec3(0.1, 0.2, 0.3);",
        "\tvec3 color = color0;",
    ]


def test_compile_returns_evaluations(builder):
    compiler = TemplateCompiler(["#evaluate <sdf>", "x", "#evaluate <bogus>"])
    output = LineOutput()
    results = compiler.compile(builder.sphere(1), output)
    assert [r.prop for r in results] == ["sdf", "bogus"]
    assert results[0].ok and not results[1].ok
    assert output.indent == 0


def test_evaluate_unknown_property(builder):
    result = evaluate(builder.sphere(1), "depth")
    assert not result.ok
    assert result.lines == []
    assert result.comment() == "/* unknown property: depth */"


def test_shared_nodes_are_rejected(builder):
    s = builder.sphere(1)
    u = builder.union(0.1, [s, s.translate((1, 0, 0))])
    with pytest.raises(ValueError):
        validate_tree(u)
    with pytest.raises(ValueError):
        compile_template(u, "#evaluate <sdf>")


def test_stream_output(builder):
    import io
    stream = io.StringIO()
    TemplateCompiler("#evaluate <sdf>").compile(builder.sphere(2), StreamOutput(stream))
    assert stream.getvalue() == (
        "float sdf0 = length(point - vec3(0.0, 0.0, 0.0)) - 2.0;\n"
        "float sdf = sdf0;\n"
    )


def test_output_indent_bookkeeping():
    output = LineOutput()
    output.push_indent(1)
    output.write("a")
    output.pop_indent(1)
    output.write("b")
    assert output.getvalue() == "\ta\nb"
    with pytest.raises(ValueError):
        output.pop_indent(1)


def test_default_template_has_all_directives():
    compiler = TemplateCompiler.default()
    props = [parse_directive(line)[0] for line in compiler.lines]
    assert [p for p in props if p] == ["sdf", "normal", "color"]
    assert DEFAULT_TEMPLATE.exists()


def test_demo_scene_compiles_cleanly(declared_names):
    shader = compile_template(demo_scene())
    assert "#evaluate" not in shader
    assert "/* error" not in shader
    assert "/* unknown" not in shader
    for snippet in ("float sdf = sdf", "vec3 normal = normal", "vec3 color = color", "smin(", "smax(", "blend3("):
        assert snippet in shader
    names = declared_names(shader)
    assert len(names) == len(set(names))


@requires_glsl_validator
def test_demo_shader_is_valid_glsl(validate_glsl):
    validate_glsl(compile_template(demo_scene()))


def test_nodes_from_different_allocators_are_rejected():
    u = SceneBuilder().union(0.1, [SceneBuilder().sphere(1), SceneBuilder().sphere(2)])
    with pytest.raises(ValueError):
        validate_tree(u)
    with pytest.raises(ValueError):
        evaluate(u, "sdf")
    with pytest.raises(ValueError):
        compile_template(u, "#evaluate <sdf>")


def test_overlapping_operator_blocks_are_rejected(builder):
    # Spheres take 0-2 and the union 3-5; id 4 names one of its intermediates.
    u = builder.union(0.1, [builder.sphere(1), builder.sphere(2), builder.sphere(3)])
    other = SceneBuilder(IdAllocator(start=4))
    with pytest.raises(ValueError):
        validate_tree(builder.union(0.1, [u, other.sphere(1)]))


def test_trees_from_one_builder_validate(builder, declared_names):
    left = builder.union(0.1, [builder.sphere(1), builder.sphere(2)])
    right = builder.cut(0.1, [builder.sphere(1), builder.plane((0, 1, 0))])
    root = builder.difference(0.2, [left, right.translate((1, 0, 0))])
    validate_tree(root)
    names = declared_names(evaluate(root, "normal").lines)
    assert len(names) == len(set(names))


def test_long_transform_chains_compile(builder):
    leaf = builder.sphere(1)
    node = leaf
    for _ in range(3000):
        node = node.translate((0, 0, 1))
    validate_tree(node)
    assert node.identifier("sdf") == leaf.identifier("sdf")
    lines = compile_template(node, "#evaluate <sdf>").split("\n")
    assert lines[0].count("vec3(0.0, 0.0, 1.0)") == 3000
    assert lines[-1] == f"float sdf = sdf{leaf.id};"


def test_deep_nesting_fails_only_its_directive(builder):
    node = builder.sphere(1)
    for _ in range(3000):
        node = builder.union(0.1, [node, builder.sphere(1)])
    out = compile_template(node, "#evaluate <sdf>\nafter")
    lines = out.split("\n")
    assert lines[-2] == "/* error: scene graph nested too deeply to compile */"
    assert lines[-1] == "after"
