"""Jinja2 sources for every generated module.

Rendered with ``trim_blocks`` and ``lstrip_blocks``, so a block tag on its
own line leaves no trace in the output.
"""

COMPONENT_TEMPLATE = """\
{{ requires }}

/**
 * @constructor
 * @param {Object} [options]
{% for line in param_docs %}
 * {{ line }}
{% endfor %}
 */
var {{ name }} = function(options) {
    {{ base }}.call(this);
    this.NAME = {{ name_literal }};

    options = Helper.defaults(options, {{ defaults }});
{% if fields %}

{% for field in fields %}
    this.{{ field }} = options.{{ field }};
{% endfor %}
{% endif %}
};

Helper.inherit({{ name }}, {{ base }});

module.exports = {{ name }};
"""

SYSTEM_TEMPLATE = """\
{% if requires %}
{{ requires }}

{% endif %}
var {{ name }} = function() {
{% if base %}
    {{ base }}.call(this);
{% endif %}
    this.requiredComponents = [
{% for item in required %}
        {{ item }}{{ "," if not loop.last else "" }}
{% endfor %}
    ];
};
{% if base %}

Helper.inherit({{ name }}, {{ base }});
{% endif %}
{% if hook %}

/**
 * {{ hook.summary }}
 * {{ hook_param_doc }}
 */
{{ name }}.prototype.{{ hook.name }} = function({{ hook.param }}) {
    for (var i = 0, len = this.{{ hook.order }}.length; i < len; i++) {
        var entity = this.{{ hook.order }}[i];
    }
};
{% endif %}

module.exports = {{ name }};
"""

FACTORY_FUNCTION_TEMPLATE = """\
    {{ function_name }}: function() {
        var entity = World.createEntity();
{% for entry in entries %}
        entity.addComponent(new {{ entry.name }}({{ entry.options }}));
{% endfor %}
        return entity;
    }"""

FACTORY_TEMPLATE = """\
{{ requires }}

var Factory = {
{% for function in functions %}
{{ function.code }}{{ "," if not loop.last else "" }}
{% endfor %}
};

module.exports = Factory;
"""

TEMPLATES = {
    "component.js": COMPONENT_TEMPLATE,
    "system.js": SYSTEM_TEMPLATE,
    "factory_function.js": FACTORY_FUNCTION_TEMPLATE,
    "factory.js": FACTORY_TEMPLATE,
}

__all__ = ["TEMPLATES"]
