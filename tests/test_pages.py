from hoyradio.pages import data_text, help_page, not_found_text, root_page


def test_help_page_lists_endpoints():
    page = help_page()
    assert page.startswith("<html>")
    assert page.endswith("</table></body></html>")
    assert "<tr><td>/reboot</td><td>startet neu</td></tr>" in page
    assert "<tr><td>:{port+1}/update</td><td>OTA</td></tr>" in page


def test_root_page_contains_uri_and_rows():
    page = root_page("/", {"U_AC": 230, "P_AC": 17})
    assert page.startswith('<html><head><meta http-equiv="refresh" content="10":URL="/"></head>')
    assert "<tr><td>U_AC</td><td>230</td></tr>" in page
    assert "<tr><td>P_AC</td><td>17</td></tr>" in page
    assert page.index("U_AC") < page.index("P_AC")
    assert page.endswith("</table></body></html>")


def test_root_page_row_count_matches_values():
    values = [(f"ch{n}", n) for n in range(5)]
    assert root_page("/x", values).count("<tr><td>") == 5


def test_data_text_lines():
    assert data_text({"a": 1, "b": "x"}) == "a=1\nb=x\n"


def test_data_text_float_has_two_decimals():
    assert data_text([("f", 50.0)]) == "f=50.00\n"


def test_data_text_empty():
    assert data_text({}) == ""


def test_not_found_get_with_args():
    text = not_found_text("/nope", "GET", [("k", "v")])
    assert text == "URI: /nope\nMethod: GET\nArguments: 1\n NAME:k\n VALUE:v\n"


def test_not_found_other_method_reports_post():
    text = not_found_text("/nope", "PUT", {})
    assert text == "URI: /nope\nMethod: POST\nArguments: 0\n"