# Generate a collection of rdtype instances for use in testing.
from typing import Any

from ndraster.core.dtype import data_type_registry
from ndraster.core.dtype.wrapper import RDType

rdtype_examples: tuple[RDType[Any, Any], ...] = tuple(
    wrapper_cls() for wrapper_cls in data_type_registry.contents.values()
)


def pytest_generate_tests(metafunc: Any) -> None:
    """
    This is a pytest hook to parametrize class-scoped fixtures.

    This hook allows us to define class-scoped fixtures as class attributes and then
    generate the parametrize calls for pytest. This allows the fixtures to be
    reused across multiple tests within the same class.

    For example, if you had a regular pytest class like this:

    class TestClass:
       @pytest.mark.parametrize("param_a", [1, 2, 3])
        def test_method(self, param_a):
            ...

    Child classes inheriting from ``TestClass`` would not be able to override the ``param_a``
    fixture.

    This implementation of ``pytest_generate_tests`` allows you to define class-scoped fixtures
    as class attributes, which allows the following to work:

    class TestExample:
        param_a = [1, 2, 3]

        def test_example(self, param_a):
            ...

    # this class will have its test_example method parametrized with the values of TestB.param_a
    class TestB(TestExample):
        param_a = [1, 2, 100, 10]

    """
    for fixture_name in metafunc.fixturenames:
        if hasattr(metafunc.cls, fixture_name):
            params = getattr(metafunc.cls, fixture_name)
            metafunc.parametrize(fixture_name, params, ids=str)
