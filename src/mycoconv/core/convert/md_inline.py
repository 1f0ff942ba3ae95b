"""Markdown inline nodes -> Mycomarkup"""

import mdurl


def _text_only(node) -> str:
    """Concatenate the content of direct text children, dropping any other inline kind."""
    return ''.join(child.content for child in node.children if child.type == 'text')


def _destination(node, attr: str) -> str:
    """Link or image destination with markdown-it's percent-encoding undone."""
    return mdurl.decode(node.attrs.get(attr, ''))


def _emphasis(node) -> str:
    # ***text*** parses as em > strong; this one shape maps to **//text//**
    if len(node.children) == 1 and node.children[0].type == 'strong':
        return '**//' + children_to_myco(node.children[0]) + '//**'
    return '//' + children_to_myco(node) + '//'


def _link(node) -> str:
    href = _destination(node, 'href')
    text = children_to_myco(node)
    if text and text != href:
        return f"[[{href} | {text}]]"
    return f"[[{href}]]"


def image_to_myco(node) -> str:
    """img { src } with the title, or failing that the alt text, after a pipe."""
    src = _destination(node, 'src')
    caption = node.attrs.get('title') or _text_only(node)
    if caption:
        return f"img {{ {src} | {caption} }}"
    return f"img {{ {src} }}"


def inline_to_myco(node) -> str:
    """Convert a single inline node."""
    t = node.type
    if t == 'text':
        return node.content
    if t in ('softbreak', 'hardbreak'):
        return '\n'
    if t == 'code_inline':
        return '`' + node.content + '`'
    if t == 'em':
        return _emphasis(node)
    if t == 'strong':
        return '**' + children_to_myco(node) + '**'
    if t == 's':
        return '~~' + children_to_myco(node) + '~~'
    if t == 'link':
        return _link(node)
    if t == 'image':
        return image_to_myco(node)
    if t == 'html_inline':
        return node.content
    return children_to_myco(node)


def children_to_myco(node) -> str:
    """Convert the inline children of node; an 'inline' container is descended into."""
    return ''.join(inline_to_myco(child) for child in node.children)
