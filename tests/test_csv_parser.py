from csv_parser import parseCsv, parseHeader


def test_one_record_per_data_line():
    rows = parseCsv("County,Proteins LBS\nELK,10\nMAR,5\n")
    assert rows == [
        {"County": "ELK", "Proteins LBS": "10"},
        {"County": "MAR", "Proteins LBS": "5"},
    ]


def test_header_only_gives_no_records():
    assert parseCsv("H1,H2\n") == []


def test_crlf_and_surrounding_whitespace():
    rows = parseCsv("  A , B \r\n 1 , 2 \r\n3,4\r\n\r\n")
    assert rows == [{"A": "1", "B": "2"}, {"A": "3", "B": "4"}]


def test_short_lines_are_padded():
    rows = parseCsv("A,B,C\n1\n1,2")
    assert rows == [
        {"A": "1", "B": "", "C": ""},
        {"A": "1", "B": "2", "C": ""},
    ]
    assert all(list(row.keys()) == ["A", "B", "C"] for row in rows)


def test_extra_fields_are_dropped():
    assert parseCsv("A,B\n1,2,3,4") == [{"A": "1", "B": "2"}]


def test_duplicate_header_keeps_later_value():
    assert parseCsv("A,A\n1,2") == [{"A": "2"}]


def test_quoted_comma_is_split():
    rows = parseCsv('Name,Qty\n"Smith, J",4')
    assert rows == [{"Name": '"Smith', "Qty": 'J"'}]


def test_blank_line_inside_data_gives_empty_record():
    rows = parseCsv("A,B\n1,2\n\n3,4")
    assert rows[1] == {"A": "", "B": ""}
    assert len(rows) == 3


def test_leading_byte_order_mark_is_trimmed():
    rows = parseCsv("\ufeffCounty,Proteins LBS\r\nELK,10")
    assert list(rows[0].keys()) == ["County", "Proteins LBS"]
    assert parseHeader("\ufeff  A , B \nx,y") == ["A", "B"]


def test_header_keeps_duplicates():
    assert parseHeader("A,B,A\n1,2,3") == ["A", "B", "A"]
