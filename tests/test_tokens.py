from typed_scss.tokens import extract_tokens


def test_class_selectors_in_first_seen_order():
    css = """
    /* .commented { } */
    .header .title, a.link:hover { color: red; }
    .title { margin: 0; }
    #main > .content[data-x=".nope"] { padding: 1px; }
    """
    assert extract_tokens(css) == ["header", "title", "link", "main", "content"]


def test_global_selectors_are_skipped():
    css = """
    :global(.external) .inner { color: red; }
    :global .also-external .still-global, .local { color: blue; }
    .wrap:not(.disabled) { color: green; }
    """
    assert extract_tokens(css) == ["inner", "local", "wrap", "disabled"]


def test_nested_at_rules_keyframes_and_exports():
    css = """
    @media (max-width: 600px) { .mobile { display: none; } }
    @keyframes fadeIn { from { opacity: 0; } to { opacity: 1; } }
    :export { primaryColor: #fff; spacing: 4px; }
    """
    assert extract_tokens(css) == ["mobile", "fadeIn", "primaryColor", "spacing"]


def test_empty_content_has_no_tokens():
    assert extract_tokens("") == []


def test_id_selectors_are_exported_unless_global():
    css = """
    #app .shell { color: red; }
    :global #root, #panel { color: blue; }
    """
    assert extract_tokens(css) == ["app", "shell", "panel"]
