"""Mermaid generation from diagram trees."""

from __future__ import annotations

from collections.abc import Callable

from .config import TranslatorConfig, normalize_config, validate_config
from .constants import (
    CLASS_HEADER,
    CONNECTOR_GLYPHS,
    FLOWCHART_HEADER,
    INFERENCE_CUES,
    LABEL_SPECIAL_CHARS,
    NODE_TEMPLATES,
    QUOTE_ENTITY,
    SEQUENCE_HEADER,
)
from .exceptions import UnsupportedDialectError
from .models import (
    ClassDeclaration,
    Dialect,
    DiagramTree,
    Edge,
    FlowNode,
    NodeKind,
    ResolvedNode,
    SequenceMessage,
)


def infer_node_kind(text: str) -> NodeKind:
    """Guess a node kind from its label or identifier.

    Cue words are matched as substrings of the lowercased text. Decision cues
    are checked first, then start cues, then end cues; anything else is a
    process.

    Args:
        text: Label of the edge that introduced the node, or its identifier.

    Returns:
        NodeKind: The first matching kind, or ``NodeKind.PROCESS``.

    Examples:
        infer_node_kind("Valid input")  # NodeKind.DECISION
        infer_node_kind("finished")  # NodeKind.END
        infer_node_kind("B")  # NodeKind.PROCESS
    """
    lowered = text.lower()
    for kind, cues in INFERENCE_CUES:
        if any(cue in lowered for cue in cues):
            return kind
    return NodeKind.PROCESS


def quote_label(text: str) -> str:
    """Wrap a label in double quotes when it contains Mermaid shape characters.

    Double quotes inside the label become the ``#quot;`` entity.

    Examples:
        quote_label("Begin")  # "Begin"
        quote_label("x]y")  # '"x]y"'
    """
    if not any(character in LABEL_SPECIAL_CHARS for character in text):
        return text
    return '"' + text.replace('"', QUOTE_ENTITY) + '"'


def render_node(node: ResolvedNode) -> str:
    label = quote_label(node.label) if node.label else node.id
    return NODE_TEMPLATES[node.kind].format(id=node.id, label=label)


def render_connection(source: str, edge: Edge) -> str:
    """Render one connection, e.g. ``a -->|yes| b``; the label segment is optional."""
    label = f"|{quote_label(edge.label)}|" if edge.label else ""
    return f"{source} {CONNECTOR_GLYPHS[edge.connector]}{label} {edge.target}"


def resolve_flowchart(tree: DiagramTree) -> tuple[dict[str, ResolvedNode], list[str]]:
    """Build the node table and connection lines of a flowchart.

    Walks statements in order. A declaration is recorded only when its id is
    not in the table yet, so the first sighting of an id decides its kind and
    label. Each edge renders its connection line immediately; a target that
    is still unknown gets a synthesized node whose kind is the one written on
    the hop, or else the kind inferred from the edge label (or the target id
    when the edge has no label).

    Args:
        tree: Flowchart diagram tree.

    Returns:
        tuple[dict[str, ResolvedNode], list[str]]: Nodes keyed by id in
            first-insertion order, and connection lines in source order.

    Examples:
        nodes, connections = resolve_flowchart(parse(tokenize("flow\\nA -> B -> C")))
        # connections == ["A --> B", "B --> C"]
    """
    nodes: dict[str, ResolvedNode] = {}
    connections: list[str] = []

    for statement in tree.statements:
        if not isinstance(statement, FlowNode):
            continue

        if statement.id not in nodes:
            nodes[statement.id] = ResolvedNode(statement.id, statement.kind, statement.label)

        source = statement.id
        for edge in statement.outgoing:
            connections.append(render_connection(source, edge))

            if edge.target not in nodes:
                kind = edge.target_kind or infer_node_kind(edge.label or edge.target)
                nodes[edge.target] = ResolvedNode(edge.target, kind)

            # Chains continue from the previous target
            source = edge.target

    return nodes, connections


def _render_flowchart(tree: DiagramTree, config: TranslatorConfig) -> list[str]:
    nodes, connections = resolve_flowchart(tree)
    body = [render_node(node) for node in nodes.values()]
    body.extend(connections)
    return [f"{FLOWCHART_HEADER} {config.direction}", *(config.indent + line for line in body)]


def _render_sequence(tree: DiagramTree, config: TranslatorConfig) -> list[str]:
    lines = [SEQUENCE_HEADER]
    for statement in tree.statements:
        if isinstance(statement, SequenceMessage):
            lines.append(
                f"{config.indent}{statement.source}->>{statement.target}: {statement.message}"
            )
    return lines


def _render_class(tree: DiagramTree, config: TranslatorConfig) -> list[str]:
    lines = [CLASS_HEADER]
    for statement in tree.statements:
        if not isinstance(statement, ClassDeclaration):
            continue

        lines.append(f"{config.indent}class {statement.name}")
        for attribute in statement.attributes:
            lines.append(f"{config.indent}{statement.name} : {attribute}")
        for method in statement.methods:
            lines.append(f"{config.indent}{statement.name} : {method}()")
    return lines


_RENDERERS: dict[Dialect, Callable[[DiagramTree, TranslatorConfig], list[str]]] = {
    Dialect.FLOWCHART: _render_flowchart,
    Dialect.SEQUENCE: _render_sequence,
    Dialect.CLASS: _render_class,
}


def generate(tree: DiagramTree, config: TranslatorConfig | None = None) -> str:
    """Render a diagram tree as Mermaid markup.

    Flowchart node and edge labels containing brackets, braces, parentheses,
    pipes or double quotes are emitted as quoted Mermaid strings.

    Args:
        tree: Tree produced by `parse`.
        config: Rendering configuration (flowchart direction, indentation).
            Defaults to a new `TranslatorConfig` when omitted.

    Returns:
        str: Mermaid lines joined with newlines, without a trailing newline.

    Raises:
        UnsupportedDialectError: If the tree carries a dialect with no renderer.
        ConfigError: If the configuration fails validation.

    Examples:
        generate(parse(tokenize("seq\\nuser -> app: login")))
        # "sequenceDiagram\\n    user->>app: login"
    """
    config = normalize_config(config or TranslatorConfig())
    validate_config(config)

    renderer = _RENDERERS.get(tree.dialect)
    if renderer is None:
        raise UnsupportedDialectError(tree.dialect)

    return "\n".join(renderer(tree, config))
