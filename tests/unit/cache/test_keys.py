"""Tests for cache key formats."""

from colcache.cache.keys import KEY_SEPARATOR, BloomCacheKey, CacheType, dictionary_cache_key


class TestDictionaryCacheKey:
    """Test dictionary key format."""

    def test_forward_key(self) -> None:
        """Forward key joins column id and cache name."""
        assert dictionary_cache_key("colA", CacheType.FORWARD_DICTIONARY) == "colA_FORWARD"

    def test_reverse_key(self) -> None:
        """Reverse key joins column id and cache name."""
        assert dictionary_cache_key("colA", CacheType.REVERSE_DICTIONARY) == "colA_REVERSE"

    def test_separator_is_underscore(self) -> None:
        assert KEY_SEPARATOR == "_"

    def test_column_id_kept_verbatim(self) -> None:
        """Column ids containing the separator are not escaped."""
        key = dictionary_cache_key("a1b2_c3", CacheType.FORWARD_DICTIONARY)
        assert key == "a1b2_c3_FORWARD"


class TestCacheType:
    """Test cache type names."""

    def test_cache_name_is_value(self) -> None:
        assert CacheType.FORWARD_DICTIONARY.cache_name == "FORWARD"
        assert CacheType.REVERSE_DICTIONARY.cache_name == "REVERSE"

    def test_only_dictionary_directions(self) -> None:
        assert [t.value for t in CacheType] == ["FORWARD", "REVERSE"]


class TestBloomCacheKey:
    """Test bloom key format."""

    def test_string_form(self) -> None:
        """Key renders shard path and index column."""
        key = BloomCacheKey("/t/Fact/Part0/Segment_0/dm/0_1", "city")
        assert str(key) == (
            "CacheKey{shardPath='/t/Fact/Part0/Segment_0/dm/0_1', indexColumn='city'}"
        )

    def test_equality_and_hash(self) -> None:
        """Keys with the same parts are equal."""
        a = BloomCacheKey("/s1", "x")
        b = BloomCacheKey("/s1", "x")
        assert a == b
        assert len({a, b}) == 1
        assert a != BloomCacheKey("/s1", "y")
