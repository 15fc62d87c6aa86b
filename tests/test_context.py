import pytest

from scoped_context import (
    MISSING,
    Context,
    NoActiveScopeError,
    NoActiveScopeNoDefaultError,
    create_context,
    dispatch,
    use_context,
    with_context,
)


def test_create_context():
    simple = create_context('simple')
    with_default = create_context('with_default', None)

    assert simple.name == 'simple'
    assert simple.default is MISSING
    assert not simple.has_default
    assert with_default.has_default
    assert with_default.default is None


def test_contexts_with_same_name_are_distinct():
    first = create_context('same', 0)
    second = create_context('same', 0)

    def check():
        with_context(first, 1)
        return use_context(first), use_context(second)

    assert first != second
    assert first.key is not second.key
    assert dispatch(check) == (1, 0)


def test_scoped_values_in_nested_scopes():
    simple = create_context('simple')

    def inner():
        with_context(simple, 2)
        return use_context(simple)

    def outer():
        with_context(simple, 1)
        inner_value = dispatch(inner)
        return inner_value, use_context(simple)

    assert dispatch(outer) == (2, 1)

    with pytest.raises(NoActiveScopeNoDefaultError):
        use_context(simple)


def test_value_from_parent_in_nested_scopes():
    simple = create_context('simple')

    def outer():
        with_context(simple, 1)
        return dispatch(lambda: use_context(simple)), use_context(simple)

    assert dispatch(outer) == (1, 1)


def test_override_is_visible_to_descendants_only():
    simple = create_context('simple')

    def child():
        with_context(simple, 'v2')
        return use_context(simple), dispatch(lambda: use_context(simple))

    def parent():
        with_context(simple, 'v1')
        overridden = dispatch(child)
        sibling = dispatch(lambda: use_context(simple))
        return overridden, sibling, use_context(simple)

    assert dispatch(parent) == (('v2', 'v2'), 'v1', 'v1')


def test_siblings_are_isolated():
    simple = create_context('simple', 0)

    def write():
        with_context(simple, 1)

    def outer():
        dispatch(write)
        return dispatch(lambda: use_context(simple))

    assert dispatch(outer) == 0


def test_default_value():
    simple = create_context('simple', 999)

    assert dispatch(lambda: use_context(simple)) == 999
    assert dispatch(lambda: dispatch(lambda: use_context(simple))) == 999


def test_no_default_inside_scope_is_none():
    simple = create_context('simple')

    assert dispatch(lambda: use_context(simple)) is None


def test_default_value_outside_scope():
    simple = create_context('simple', 2)

    assert use_context(simple) == 2


def test_no_default_outside_scope():
    simple = create_context('simple')

    with pytest.raises(NoActiveScopeNoDefaultError, match="'simple'"):
        use_context(simple)


def test_with_context_outside_scope():
    simple = create_context('simple', 1)

    with pytest.raises(NoActiveScopeError):
        with_context(simple, 2)

    assert use_context(simple) == 1


def test_derived_value():
    simple = create_context('simple')

    def child():
        with_context(simple, lambda value: value + 1)
        return use_context(simple)

    def parent():
        with_context(simple, 5)
        return dispatch(child), use_context(simple)

    assert dispatch(parent) == (6, 5)


def test_derived_value_from_default():
    tags = create_context('tags', ())

    def check():
        with_context(tags, lambda value: (*value, 'a'))
        with_context(tags, lambda value: (*value, 'b'))
        return use_context(tags)

    assert dispatch(check) == ('a', 'b')
    assert use_context(tags) == ()


def test_callable_value_is_wrapped():
    handler = create_context('handler')

    def check():
        with_context(handler, lambda _: len)
        return use_context(handler)

    assert dispatch(check) is len


def test_value_from_dispatch_functions():
    simple = create_context('simple', 2)
    second = create_context('second')

    def outer():
        with_context(second, 2)
        second_value = dispatch(lambda: use_context(second))
        return use_context(simple) * second_value

    assert dispatch(outer) == 4


def test_key_cannot_be_shared():
    first = create_context('first')

    with pytest.raises(TypeError):
        Context('second', key=first.key)
