import pytest

from word_scout.crawler.site import SitePolicy, host_of, registrable_domain


@pytest.mark.parametrize(
    "policy,source,target,expected",
    [
        (SitePolicy.SAME, "https://example.com/", "https://example.com/a", True),
        (SitePolicy.SAME, "https://example.com/", "https://www.example.com/", False),
        (SitePolicy.SAME, "https://example.com/", "http://example.com:8080/x", True),
        (SitePolicy.SUBDOMAIN, "https://example.com/", "https://blog.example.com/", True),
        (SitePolicy.SUBDOMAIN, "https://example.com/", "https://example.com/", True),
        (SitePolicy.SUBDOMAIN, "https://blog.example.com/", "https://example.com/", False),
        (SitePolicy.SUBDOMAIN, "https://example.com/", "https://notexample.com/", False),
        (SitePolicy.SIBLING, "https://blog.example.com/", "https://shop.example.com/", True),
        (SitePolicy.SIBLING, "https://blog.example.com/", "https://example.com/", True),
        (SitePolicy.SIBLING, "https://a.example.co.uk/", "https://b.example.co.uk/", True),
        (SitePolicy.SIBLING, "https://example.co.uk/", "https://other.co.uk/", False),
        (SitePolicy.SIBLING, "http://localhost:8000/", "http://localhost:9000/", True),
        (SitePolicy.SIBLING, "http://localhost/", "http://127.0.0.1/", False),
        (SitePolicy.ALL, "https://example.com/", "https://anything.org/", True),
    ],
)
def test_policy_table(policy, source, target, expected):
    assert policy.matches(source, target) is expected


@pytest.mark.parametrize("policy", list(SitePolicy))
@pytest.mark.parametrize("target", ["mailto:someone@example.com", "javascript:void(0)", "data:text/plain,hi"])
def test_hostless_targets_always_rejected(policy, target):
    assert policy.matches("https://example.com/", target) is False


def test_host_and_domain_helpers():
    assert host_of("https://WWW.Example.COM/path") == "www.example.com"
    assert host_of("mailto:x@y.z") is None
    assert registrable_domain("a.b.example.co.uk") == "example.co.uk"
    assert registrable_domain("localhost") is None


def test_policy_from_string():
    assert SitePolicy("subdomain") is SitePolicy.SUBDOMAIN
    assert str(SitePolicy.SIBLING) == "sibling"
