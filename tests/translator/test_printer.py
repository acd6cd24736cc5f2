"""Tests for the printer module."""

from dts2re.translator.code_block import CodeBlock
from dts2re.translator.models import (
    Interface,
    InterfaceKind,
    Method,
    Module,
    Parameter,
    Property,
    Variable,
)
from dts2re.translator.printer import (
    capitalize,
    print_method,
    print_parameter,
    print_property,
    print_variable,
    render,
)

SENTINEL = Parameter(name="", type="unit")


def test_capitalize():
    assert capitalize("getFoo") == "GetFoo"
    assert capitalize("x") == "X"
    assert capitalize("") == ""


def test_print_variable():
    variable = Variable(name="version", type="string")
    assert print_variable(variable) == 'external version : string = "" [@@bs.val];'


def test_print_parameter():
    """Test that parameters are labelled when named or optional."""
    required = Parameter(name="a", type="float")
    optional = Parameter(name="b", type="string", optional=True)

    assert print_parameter(required, include_name=False) == "float"
    assert print_parameter(required, include_name=True) == "a::float"
    assert print_parameter(optional, include_name=False) == "?b::string"
    assert print_parameter(optional, include_name=True) == "?b::string"
    assert print_parameter(SENTINEL, include_name=True) == "unit"


def test_print_constructor():
    """Test that constructors link to the owning class in the library module."""
    ctor = Method(name="make", type="t", ctor=True, module_name="Widget")
    assert print_method(ctor, "lib") == (
        'external make : unit => t = "Widget" [@@bs.new] [@@bs.module "lib"];'
    )

    ctor.parameters = [Parameter(name="title", type="string")]
    assert print_method(ctor, "lib") == (
        'external make : title::string => t = "Widget" '
        '[@@bs.new] [@@bs.module "lib"];'
    )


def test_print_maker():
    maker = Method(
        name="make",
        type="t",
        static=True,
        maker=True,
        parameters=[
            Parameter(name="x", type="float"),
            Parameter(name="y", type="string", optional=True),
            SENTINEL,
        ],
    )
    assert print_method(maker, "lib") == (
        'external make : x::float => ?y::string => unit => t = "" [@@bs.obj];'
    )


def test_print_empty_maker():
    maker = Method(name="make", type="t", static=True, maker=True)
    assert print_method(maker, "lib") == 'external make : unit => t = "" [@@bs.obj];'


def test_print_instance_method():
    """Test that instance methods take the receiver first."""
    method = Method(
        name="emit",
        type="bool",
        parameters=[Parameter(name="event", type="string")],
    )
    assert print_method(method, "lib") == (
        'external emit : t => string => bool = "" [@@bs.send];'
    )

    method.parameters = []
    assert print_method(method, "lib") == 'external emit : t => bool = "" [@@bs.send];'


def test_print_static_method():
    method = Method(
        name="foo",
        type="unit",
        static=True,
        parameters=[
            Parameter(name="a", type="float"),
            Parameter(name="b", type="string", optional=True),
            SENTINEL,
        ],
    )
    assert print_method(method, "lib") == (
        'external foo : float => ?b::string => unit => unit = "";'
    )

    method.parameters = []
    assert print_method(method, "lib") == 'external foo : unit => unit = "";'


def test_print_property():
    """Test that a property becomes a setter and a getter."""
    code = CodeBlock()
    print_property(Property(name="title", type="string"), code)
    assert code.lines == [
        'external setTitle : t => string => unit = "title" [@@bs.set];',
        'external getTitle : t => string = "title" [@@bs.get];',
        "",
    ]


def test_print_optional_property():
    code = CodeBlock()
    print_property(Property(name="icon", type="Image.t", optional=True), code)
    assert code.lines == [
        'external setIcon : t => option Image.t => unit = "icon" [@@bs.set];',
        'external getIcon : t => option Image.t = "icon" [@@bs.get] '
        "[@@bs.return null_undefined_to_opt];",
        "",
    ]


def test_render_interface_puts_properties_after_methods():
    # Arrange
    ifc = Interface(
        name="Point",
        properties=[Property(name="x", type="float")],
        methods=[Method(name="make", type="t", static=True, maker=True)],
    )
    root = Module(name="geometry", interfaces=[ifc])

    # Act
    code = render(root)

    # Assert
    assert code == (
        "let module Point = {\n"
        "  type t;\n"
        "\n"
        '  external make : unit => t = "" [@@bs.obj];\n'
        '  external setX : t => float => unit = "x" [@@bs.set];\n'
        '  external getX : t => float = "x" [@@bs.get];\n'
        "\n"
        "};\n"
        "\n"
    )


def test_render_module_order():
    """Test variables, functions, interfaces, then nested modules."""
    # Arrange
    child = Module(
        name="Shell",
        methods=[Method(name="beep", type="unit", static=True)],
    )
    root = Module(
        name="electron",
        modules=[child],
        variables=[Variable(name="version", type="string")],
        interfaces=[
            Interface(
                name="App",
                kind=InterfaceKind.CLASS,
                methods=[
                    Method(name="make", type="t", ctor=True, module_name="App"),
                ],
            )
        ],
        methods=[Method(name="quit", type="unit", static=True)],
    )

    # Act
    code = render(root)

    # Assert
    assert code == (
        'external version : string = "" [@@bs.val];\n'
        'external quit : unit => unit = "";\n'
        "let module App = {\n"
        "  type t;\n"
        "\n"
        '  external make : unit => t = "App" [@@bs.new] [@@bs.module "electron"];\n'
        "};\n"
        "\n"
        "let module Shell = {\n"
        "\n"
        '  external beep : unit => unit = "";\n'
        "};\n"
        "\n"
    )


def test_render_nested_constructor_links_library_module():
    inner = Module(
        name="Inner",
        interfaces=[
            Interface(
                name="Thing",
                kind=InterfaceKind.CLASS,
                methods=[
                    Method(name="make", type="t", ctor=True, module_name="Thing")
                ],
            )
        ],
    )
    code = render(Module(name="lib", modules=[Module(name="Outer", modules=[inner])]))
    assert '= "Thing" [@@bs.new] [@@bs.module "lib"];' in code
    assert "    let module Thing = {\n" in code


def test_render_empty_module():
    assert render(Module(name="empty")) == ""


def test_emit_template_is_not_used():
    """Test that special members render with the generic method template."""
    invoke = Method(
        name="invoke",
        type="string",
        parameters=[Parameter(name="x", type="float")],
        emit="$0($1...)",
    )
    root = Module(name="lib", interfaces=[Interface(name="Fn", methods=[invoke])])
    assert 'external invoke : t => float => string = "" [@@bs.send];' in render(root)
