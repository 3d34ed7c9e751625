"""
Canonical XPath and CSS paths describing where an element sits in its tree.

Both are derived from tree position only, never from the selector that
found the element.
"""

from lxml import etree


def is_element(node) -> bool:
    """True for element nodes; False for comments, processing instructions and text."""
    return isinstance(node, etree._Element) and isinstance(node.tag, str)


def compute_xpath(element: etree._Element) -> str:
    """
    Absolute XPath for an element.

    Elements with an id short-circuit to ``//*[@id="..."]``. Otherwise every
    level contributes ``/tag[n]`` where n counts preceding siblings with the
    same tag name, starting at 1.
    """
    element_id = element.get("id")
    if element_id:
        return f'//*[@id="{element_id}"]'

    parts = []
    node = element
    while node is not None and is_element(node):
        index = 1
        for sibling in node.itersiblings(preceding=True):
            if is_element(sibling) and sibling.tag == node.tag:
                index += 1
        parts.append(f"/{node.tag.lower()}[{index}]")
        node = node.getparent()

    return "".join(reversed(parts))


def compute_css_path(element: etree._Element) -> str:
    """
    CSS path for an element: ``#id`` when it has one, otherwise
    ``tag.class1.class2`` per level joined by ``" > "`` from the root down.
    """
    element_id = element.get("id")
    if element_id:
        return f"#{element_id}"

    segments = []
    node = element
    while node is not None and is_element(node):
        segment = node.tag.lower()
        classes = (node.get("class") or "").split()
        if classes:
            segment += "." + ".".join(classes)
        segments.append(segment)
        node = node.getparent()

    return " > ".join(reversed(segments))
