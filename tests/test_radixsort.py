import pytest

from bsdcompat.radixsort import radixsort, sradixsort


@pytest.mark.parametrize("sort", [radixsort, sradixsort])
def test_plain_byte_order(sort):
    data = [b"pear", b"apple", b"banana", b"app", b"", b"apples"]
    assert sort(data) == [b"", b"app", b"apple", b"apples", b"banana", b"pear"]


@pytest.mark.parametrize("sort", [radixsort, sradixsort])
def test_large_input_matches_builtin_order(sort):
    data = [bytes([(i * 37) % 251 + 1, (i * 11) % 97 + 1]) for i in range(300)]
    assert sort(data) == sorted(data)


@pytest.mark.parametrize("sort", [radixsort, sradixsort])
def test_nul_terminates_string(sort):
    result = sort([b"b", b"a\0zzz", b"a"])
    assert result[2] == b"b"
    assert set(result[:2]) == {b"a\0zzz", b"a"}


def test_stable_sort_keeps_order_of_equal_strings():
    data = [b"a\0y", b"b", b"a\0x", b"a"]
    assert sradixsort(data) == [b"a\0y", b"a\0x", b"a", b"b"]


def test_custom_end_byte_sorts_first():
    # '/' ends each string, so "a/" ends before "a." continues.
    assert radixsort([b"a.", b"a/"], None, ord("/")) == [b"a/", b"a."]
    result = sradixsort([b"a/b", b"a"], None, ord("/"))
    assert result == [b"a/b", b"a"]


def test_case_folding_table():
    table = bytes(range(256)).lower()
    data = [b"Banana", b"apple", b"Cherry", b"avocado"]
    assert sradixsort(data, table, 0) == [b"apple", b"avocado", b"Banana", b"Cherry"]


def test_table_with_end_value_255_sorts_prefix_last():
    table = bytearray(range(256))
    table[0], table[255] = 255, 0
    assert radixsort([b"ab", b"abc"], bytes(table), 0) == [b"abc", b"ab"]


def test_bad_end_value_in_table():
    with pytest.raises(ValueError):
        radixsort([b"a"], bytes(range(256)), 7)


def test_table_of_wrong_size():
    with pytest.raises(ValueError):
        sradixsort([b"a"], b"\0" * 10, 0)


def test_end_byte_out_of_range():
    with pytest.raises(ValueError):
        radixsort([b"a"], None, 256)


def test_missing_strings():
    with pytest.raises(TypeError):
        sradixsort(None)