import pytest

from bulk_notifier.application.services import EMAIL_RETRY_POLICY, SMS_RETRY_POLICY
from bulk_notifier.channels import IletimerkeziSmsTransport, NetgsmSmsTransport, SendGridEmailTransport
from bulk_notifier.domain.models import ChannelType, Provider
from bulk_notifier.infrastructure.adapters import ProviderRegistry, TransportFactory


class TestProviderRegistry:
    def test_no_credentials_resolves_empty(self, make_settings):
        registry = ProviderRegistry(make_settings())

        assert registry.resolve(ChannelType.EMAIL) == ()
        assert registry.resolve(ChannelType.SMS) == ()

    def test_email_provider_found(self, make_settings):
        registry = ProviderRegistry(make_settings(sendgrid_api_key="SG.key", email_from="shop@example.com"))

        (config,) = registry.resolve(ChannelType.EMAIL)
        assert config.provider is Provider.SENDGRID
        assert config.credentials == {"api_key": "SG.key"}
        assert config.sender_identity == "shop@example.com"

    def test_sms_precedence_netgsm_before_iletimerkezi(self, make_settings):
        registry = ProviderRegistry(
            make_settings(
                netgsm_username="n-user",
                netgsm_password="n-pass",
                iletimerkezi_username="i-user",
                iletimerkezi_password="i-pass",
            )
        )

        providers = registry.resolve(ChannelType.SMS)
        assert [p.provider for p in providers] == [Provider.NETGSM, Provider.ILETIMERKEZI]

    def test_partial_credentials_are_ignored(self, make_settings):
        registry = ProviderRegistry(
            make_settings(
                netgsm_username="n-user",
                iletimerkezi_username="i-user",
                iletimerkezi_password="i-pass",
            )
        )

        providers = registry.resolve(ChannelType.SMS)
        assert [p.provider for p in providers] == [Provider.ILETIMERKEZI]

    def test_resolution_is_fixed_at_construction(self, make_settings):
        settings = make_settings()
        registry = ProviderRegistry(settings)

        settings.sendgrid_api_key = "SG.late"

        assert registry.resolve(ChannelType.EMAIL) == ()

    def test_credentials_hidden_from_repr(self, make_settings):
        registry = ProviderRegistry(make_settings(netgsm_username="n-user", netgsm_password="hunter2"))

        assert "hunter2" not in repr(registry.resolve(ChannelType.SMS))


class TestTransportFactory:
    @pytest.fixture
    def registry(self, make_settings):
        return ProviderRegistry(
            make_settings(
                sendgrid_api_key="SG.key",
                netgsm_username="n-user",
                netgsm_password="n-pass",
                iletimerkezi_username="i-user",
                iletimerkezi_password="i-pass",
            )
        )

    def test_creates_transport_per_provider(self, registry):
        factory = TransportFactory()

        email = [factory.get_transport(c) for c in registry.resolve(ChannelType.EMAIL)]
        sms = [factory.get_transport(c) for c in registry.resolve(ChannelType.SMS)]

        assert [type(t) for t in email] == [SendGridEmailTransport]
        assert [type(t) for t in sms] == [NetgsmSmsTransport, IletimerkeziSmsTransport]

    def test_transports_are_cached(self, registry):
        factory = TransportFactory()
        (config,) = registry.resolve(ChannelType.EMAIL)

        assert factory.get_transport(config) is factory.get_transport(config)

    def test_transport_timeouts_match_retry_policies(self, registry):
        factory = TransportFactory()
        (email_config,) = registry.resolve(ChannelType.EMAIL)
        sms_configs = registry.resolve(ChannelType.SMS)

        assert factory.get_transport(email_config)._timeout == EMAIL_RETRY_POLICY.attempt_timeout == 30.0
        assert {factory.get_transport(c)._timeout for c in sms_configs} == {SMS_RETRY_POLICY.attempt_timeout}
        assert SMS_RETRY_POLICY.attempt_timeout == 45.0
