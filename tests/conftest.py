# tests/conftest.py
"""
Shared .nox sources and helpers for the noxml test-suite.
"""

import textwrap

import pytest

from noxml import NoxCompiler


def nox(text: str) -> str:
    """Dedent an inline triple-quoted source and drop the leading newline."""
    return textwrap.dedent(text).lstrip("\n")


CONTAINER_NOX = nox('''
    rect name="container":
        width: 500
        image name="icon":
''')

CONTAINER_XML = (
    '<rect name="container">\n'
    '\t<width>500</width>\n'
    '\t<image name="icon"></image>\n'
    '</rect>\n'
)

MENU_NOX = nox('''
    // Main menu panel
    rect name="main_menu" id="1":
        locus: &true;
        width: 640
        height: me().width / 16 * 9   // widescreen

        image name="background":
            filename: menus\\.dds
            x: parent().width - me().width
            depth: 3

        text name="title":
            string: Hello World
            x: background().x + 12
''')

MENU_XML = (
    '<rect name="main_menu" id="1">\n'
    '\t<locus>&true;</locus>\n'
    '\t<width>640</width>\n'
    '\t<height><copy src="me()" trait="width" /><div>16</div><mult>9</mult></height>\n'
    '\t<image name="background">\n'
    '\t\t<filename>menus.dds</filename>\n'
    '\t\t<x><copy src="parent()" trait="width" /><sub src="me()" trait="width" /></x>\n'
    '\t\t<depth>3</depth>\n'
    '\t</image>\n'
    '\t<text name="title">\n'
    '\t\t<string>Hello World</string>\n'
    '\t\t<x><copy src="background()" trait="x" /><add>12</add></x>\n'
    '\t</text>\n'
    '</rect>\n'
)


@pytest.fixture
def compiler() -> NoxCompiler:
    return NoxCompiler()
