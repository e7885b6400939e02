"""Tests for short code generation and allocation."""

import random
from collections import Counter

import pytest
from shortlinks.common.validators import is_valid_code
from shortlinks.database.memory import MemoryLinkStore
from shortlinks.errors import AllocationExhaustedError, CodeExistsError, InvalidCodeError
from shortlinks.shortcode import CodeAllocator, ShortCodeGenerator


class FixedGenerator(ShortCodeGenerator):
    """Hands out a fixed sequence of codes."""

    def __init__(self, codes):
        super().__init__()
        self.codes = list(codes)
        self.calls = 0

    def generate_random(self, length=None):
        self.calls += 1
        return self.codes.pop(0)


class CountingStore(MemoryLinkStore):
    """Memory store that counts existence checks."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.exists_calls = 0

    async def exists(self, code):
        self.exists_calls += 1
        return await super().exists(code)


class TestShortCodeGenerator:
    """Random code generation."""

    def test_generate_random_shape(self):
        generator = ShortCodeGenerator(rng=random.Random(7))

        for _ in range(500):
            code = generator.generate_random()
            assert 6 <= len(code) <= 8
            assert is_valid_code(code)

    def test_every_length_is_drawn(self):
        generator = ShortCodeGenerator(rng=random.Random(7))

        lengths = Counter(len(generator.generate_random()) for _ in range(300))
        assert set(lengths) == {6, 7, 8}

    def test_generate_random_explicit_length(self):
        generator = ShortCodeGenerator(rng=random.Random(7))
        assert len(generator.generate_random(length=7)) == 7

    def test_seeded_generators_agree(self):
        a = ShortCodeGenerator(rng=random.Random(42))
        b = ShortCodeGenerator(rng=random.Random(42))
        assert [a.generate_random() for _ in range(5)] == [b.generate_random() for _ in range(5)]

    def test_alphabet(self):
        assert len(ShortCodeGenerator.BASE62_CHARS) == 62
        assert len(set(ShortCodeGenerator.BASE62_CHARS)) == 62


class TestCodeAllocator:
    """Allocating free codes."""

    async def test_requested_code_is_returned(self, store):
        allocator = CodeAllocator(store)
        assert await allocator.allocate("mycode1") == "mycode1"

    @pytest.mark.parametrize("code", ["abc12", "abc123def", "bad-code", "abc 123"])
    async def test_requested_code_bad_shape(self, code):
        store = CountingStore()
        allocator = CodeAllocator(store)

        with pytest.raises(InvalidCodeError):
            await allocator.allocate(code)
        assert store.exists_calls == 0

    async def test_requested_code_taken(self, store):
        await store.insert("mycode1", "https://example.com")
        allocator = CodeAllocator(store)

        with pytest.raises(CodeExistsError):
            await allocator.allocate("mycode1")

    async def test_random_code_skips_collisions(self, store):
        await store.insert("taken01", "https://example.com/1")
        await store.insert("taken02", "https://example.com/2")
        generator = FixedGenerator(["taken01", "taken02", "free001"])
        allocator = CodeAllocator(store, generator=generator)

        assert await allocator.allocate() == "free001"
        assert generator.calls == 3

    async def test_exhausted_after_ten_draws(self):
        store = CountingStore()
        await store.insert("taken01", "https://example.com")
        generator = FixedGenerator(["taken01"] * 20)
        allocator = CodeAllocator(store, generator=generator)

        with pytest.raises(AllocationExhaustedError):
            await allocator.allocate()
        assert generator.calls == 10
        assert store.exists_calls == 10

    async def test_tenth_draw_can_still_succeed(self, store):
        await store.insert("taken01", "https://example.com")
        generator = FixedGenerator(["taken01"] * 9 + ["free001"])
        allocator = CodeAllocator(store, generator=generator)

        assert await allocator.allocate() == "free001"

    async def test_max_attempts_is_configurable(self, store):
        await store.insert("taken01", "https://example.com")
        generator = FixedGenerator(["taken01"] * 3)
        allocator = CodeAllocator(store, generator=generator, max_attempts=3)

        with pytest.raises(AllocationExhaustedError):
            await allocator.allocate()
