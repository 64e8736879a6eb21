import pytest

from grid_state import GridRecord
from text_codec import Layout, NO_COLOR_TOKEN, decode_text, detect_layout, encode_text


def test_index_only_layout():
    records = [GridRecord(0), GridRecord(5), GridRecord(15)]
    assert encode_text(records) == "0,5,15"
    assert decode_text("0,5,15") == records


def test_index_color_layout():
    records = [GridRecord(2, "#ff0000")]
    assert encode_text(records) == "2,#ff0000"
    assert decode_text("2,#ff0000") == records


def test_mixed_records_use_placeholder_for_default_color():
    records = [GridRecord(1), GridRecord(2, "red")]
    text = encode_text(records)
    assert text == f"1,{NO_COLOR_TOKEN},2,red"
    assert decode_text(text) == records


def test_empty():
    assert encode_text([]) == ""
    assert decode_text("") == []


def test_drops_empty_tokens():
    assert decode_text(",0,,5,15,") == [GridRecord(0), GridRecord(5), GridRecord(15)]
    assert decode_text("2,,#ff0000,") == [GridRecord(2, "#ff0000")]


@pytest.mark.parametrize("text", ["0,5x,15", "0,-1,15", "0, ,15", "0,1.5,15"])
def test_drops_unparseable_indices(text):
    assert decode_text(text) == [GridRecord(0), GridRecord(15)]


def test_dangling_color_token_is_dropped():
    assert decode_text("2,#ff0000,7") == [GridRecord(2, "#ff0000")]
    assert decode_text("2,#ff0000,7") == decode_text("2,#ff0000")


def test_pair_with_bad_index_is_dropped():
    assert decode_text("zz,#fff,3,red") == [GridRecord(3, "red")]


def test_no_bounds_checking():
    assert decode_text("99999") == [GridRecord(99999)]


def test_colors_returned_raw():
    assert decode_text("4,notacolor") == [GridRecord(4, "notacolor")]


def test_forced_layout():
    assert decode_text("1,2", Layout.INDEX_COLOR) == [GridRecord(1, "2")]
    assert decode_text("1,red", Layout.INDEX_ONLY) == [GridRecord(1)]


def test_detect_layout():
    assert detect_layout(["3"]) is Layout.INDEX_ONLY
    assert detect_layout(["3", "4"]) is Layout.INDEX_ONLY
    assert detect_layout(["3", "#abc"]) is Layout.INDEX_COLOR
    assert detect_layout(["3", NO_COLOR_TOKEN]) is Layout.INDEX_COLOR


def test_color_with_delimiter_is_rejected():
    with pytest.raises(ValueError):
        encode_text([GridRecord(1, "rgb(1,2,3)")])


def test_single_index_with_color_reads_as_pair():
    # one index followed by a color is a complete index-color text
    assert decode_text("0,#ff0000") == [GridRecord(0, "#ff0000")]
    assert decode_text("0,5,#ff0000") == [GridRecord(0), GridRecord(5)]
