"""Exact output of the generated JavaScript modules."""

from clairvoyant.artifacts import ArtifactKind
from clairvoyant.ast import Component, NumericLiteral, ObjectLiteral, Property, StringLiteral
from clairvoyant.codegen import CodeGenerator, require_block
from clairvoyant.variant import BaseKind, Variant


def _number(raw):
    return NumericLiteral(value=int(raw), raw=raw)


def _bag(**values):
    return ObjectLiteral(properties=[Property(name=k, value=v) for k, v in values.items()])


def test_require_block() -> None:
    assert require_block([("A", "m", "A"), ("B", "m", "B")]) == (
        "var A = require('m').A,\n"
        "    B = require('m').B;"
    )
    assert require_block([("Health", "./components/health.js", None)]) == (
        "var Health = require('./components/health.js');"
    )


def test_component_module() -> None:
    component = Component(name="Health", properties=[Property(name="hp", value=_number("10"))])
    artifact = CodeGenerator().generate_component(component)

    assert artifact.kind is ArtifactKind.COMPONENT
    assert artifact.filename == "health.js"
    assert artifact.base is BaseKind.COMPONENT
    assert artifact.source == (
        "var Component = require('psykick2d').Component,\n"
        "    Helper = require('psykick2d').Helper;\n"
        "\n"
        "/**\n"
        " * @constructor\n"
        " * @param {Object} [options]\n"
        " * @param {number} [options.hp=10]\n"
        " */\n"
        "var Health = function(options) {\n"
        "    Component.call(this);\n"
        "    this.NAME = 'Health';\n"
        "\n"
        "    options = Helper.defaults(options, {\n"
        "        hp: 10\n"
        "    });\n"
        "\n"
        "    this.hp = options.hp;\n"
        "};\n"
        "\n"
        "Helper.inherit(Health, Component);\n"
        "\n"
        "module.exports = Health;\n"
    )


def test_component_with_nested_and_repeated_properties() -> None:
    component = Component(
        name="SpriteComponent",
        properties=[
            Property(name="src", value=StringLiteral(value="hero.png")),
            Property(name="frame", value=_bag(x=_number("0"))),
            Property(name="src", value=StringLiteral(value="villain.png")),
        ],
    )
    source = CodeGenerator(Variant.THREE_D).generate_component(component).source

    assert "var Component = require('psykick3d').Component," in source
    assert " * @param {string} [options.src='villain.png']\n" in source
    assert " * @param {Object} [options.frame]\n" in source
    assert (
        "    options = Helper.defaults(options, {\n"
        "        src: 'hero.png',\n"
        "        frame: {\n"
        "            x: 0\n"
        "        },\n"
        "        src: 'villain.png'\n"
        "    });\n"
        "\n"
        "    this.src = options.src;\n"
        "    this.frame = options.frame;\n"
        "};\n"
    ) in source


def test_component_without_properties() -> None:
    source = CodeGenerator().generate_component(Component(name="Tag")).source
    assert (
        "    this.NAME = 'Tag';\n"
        "\n"
        "    options = Helper.defaults(options, {});\n"
        "};\n"
    ) in source


def test_render_system_module() -> None:
    artifact = CodeGenerator().generate_system(
        "PlayerRenderSystem", ["Position", "Sprite"], BaseKind.RENDER_SYSTEM
    )

    assert artifact.filename == "player-render.js"
    assert artifact.source == (
        "var RenderSystem = require('psykick2d').RenderSystem,\n"
        "    Helper = require('psykick2d').Helper;\n"
        "\n"
        "var PlayerRenderSystem = function() {\n"
        "    RenderSystem.call(this);\n"
        "    this.requiredComponents = [\n"
        "        'Position',\n"
        "        'Sprite'\n"
        "    ];\n"
        "};\n"
        "\n"
        "Helper.inherit(PlayerRenderSystem, RenderSystem);\n"
        "\n"
        "/**\n"
        " * Draw every entity in draw order\n"
        " * @param {CanvasRenderingContext2D} c\n"
        " */\n"
        "PlayerRenderSystem.prototype.draw = function(c) {\n"
        "    for (var i = 0, len = this.drawOrder.length; i < len; i++) {\n"
        "        var entity = this.drawOrder[i];\n"
        "    }\n"
        "};\n"
        "\n"
        "module.exports = PlayerRenderSystem;\n"
    )


def test_behavior_system_gets_update_hook() -> None:
    source = CodeGenerator().generate_system("AISystem", ["Brain"], BaseKind.BEHAVIOR_SYSTEM).source
    assert "var BehaviorSystem = require('psykick2d').BehaviorSystem," in source
    assert " * @param {number} delta\n" in source
    assert "AISystem.prototype.update = function(delta) {\n" in source
    assert "this.actionOrder[i];" in source


def test_plain_system_module() -> None:
    artifact = CodeGenerator().generate_system("MovementSystem", ["Position", "Velocity"], None)
    assert artifact.base is None
    assert artifact.source == (
        "var MovementSystem = function() {\n"
        "    this.requiredComponents = [\n"
        "        'Position',\n"
        "        'Velocity'\n"
        "    ];\n"
        "};\n"
        "\n"
        "module.exports = MovementSystem;\n"
    )


def test_three_d_system_uses_library_system() -> None:
    source = CodeGenerator(Variant.THREE_D).generate_system("Spin", ["Mesh"], BaseKind.SYSTEM).source
    assert source.startswith(
        "var System = require('psykick3d').System,\n"
        "    Helper = require('psykick3d').Helper;\n"
    )
    assert "Helper.inherit(Spin, System);" in source
    assert "Spin.prototype.update = function(delta) {" in source


def test_factory_module() -> None:
    generator = CodeGenerator()
    goblin = generator.generate_factory_function(
        "Goblin",
        {
            "Position": _bag(x=_number("0"), y=_number("0")),
            "Health": _bag(hp=_number("10")),
        },
    )
    marker = generator.generate_factory_function("Marker", {"Tag": ObjectLiteral()})
    artifact = generator.generate_factory([goblin, marker], ["Position", "Health", "Tag"])

    assert artifact.kind is ArtifactKind.FACTORY
    assert artifact.filename == "factory.js"
    assert [f.function_name for f in artifact.functions] == ["createGoblin", "createMarker"]
    assert artifact.source == (
        "var World = require('psykick2d').World,\n"
        "    Tag = require('./components/tag.js'),\n"
        "    Health = require('./components/health.js'),\n"
        "    Position = require('./components/position.js');\n"
        "\n"
        "var Factory = {\n"
        "    createGoblin: function() {\n"
        "        var entity = World.createEntity();\n"
        "        entity.addComponent(new Position({\n"
        "            x: 0,\n"
        "            y: 0\n"
        "        }));\n"
        "        entity.addComponent(new Health({\n"
        "            hp: 10\n"
        "        }));\n"
        "        return entity;\n"
        "    },\n"
        "    createMarker: function() {\n"
        "        var entity = World.createEntity();\n"
        "        entity.addComponent(new Tag({}));\n"
        "        return entity;\n"
        "    }\n"
        "};\n"
        "\n"
        "module.exports = Factory;\n"
    )


def test_factory_require_order_breaks_length_ties_lexicographically() -> None:
    artifact = CodeGenerator().generate_factory([], ["Zeta", "Beta", "Alphabet"])
    assert artifact.source.startswith(
        "var World = require('psykick2d').World,\n"
        "    Beta = require('./components/beta.js'),\n"
        "    Zeta = require('./components/zeta.js'),\n"
        "    Alphabet = require('./components/alphabet.js');\n"
    )
