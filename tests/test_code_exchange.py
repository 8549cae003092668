import unittest

from session_client.exceptions import RedirectError
from session_client.services.code_exchange import exchange_for_session, parse_redirect
from tests.fakes import FakeBackend


class TestParseRedirect(unittest.TestCase):
    def test_bare_code(self):
        self.assertEqual(parse_redirect(" abc123 ").code, "abc123")

    def test_query_code(self):
        params = parse_redirect("https://app.example/callback?code=abc&state=s")
        self.assertEqual(params.code, "abc")
        self.assertIsNone(params.error)

    def test_action_link_token(self):
        params = parse_redirect(
            "https://ref.supabase.co/auth/v1/verify?token=hashed&type=magiclink&redirect_to=x"
        )
        self.assertEqual(params.token_hash, "hashed")
        self.assertEqual(params.otp_type, "magiclink")

    def test_fragment_tokens(self):
        params = parse_redirect("myapp://callback#access_token=a&refresh_token=r&expires_in=3600")
        self.assertEqual(params.access_token, "a")
        self.assertEqual(params.refresh_token, "r")

    def test_provider_error(self):
        params = parse_redirect("myapp://callback?error=server_error&error_description=Oops")
        self.assertEqual(params.error, "server_error")
        self.assertEqual(params.error_description, "Oops")


class TestExchangeForSession(unittest.IsolatedAsyncioTestCase):
    async def test_code_uses_code_exchange(self):
        backend = FakeBackend()

        session = await exchange_for_session(backend, "myapp://callback?code=abc")

        self.assertEqual(session["session"]["access_token"], "from-code")
        self.assertEqual([name for name, _ in backend.calls], ["exchange_code_for_session"])

    async def test_token_hash_uses_otp_verification(self):
        backend = FakeBackend()

        await exchange_for_session(backend, "https://x.example/verify?token_hash=h&type=recovery")

        self.assertEqual(backend.calls, [("verify_otp", ("h", "recovery"))])

    async def test_implicit_tokens_install_session(self):
        backend = FakeBackend()

        await exchange_for_session(backend, "myapp://callback#access_token=a&refresh_token=r")

        self.assertEqual(backend.calls, [("set_session", ("a", "r"))])

    async def test_link_without_session_material_fails(self):
        backend = FakeBackend()

        with self.assertRaises(RedirectError) as ctx:
            await exchange_for_session(backend, "myapp://callback?state=only")

        self.assertEqual(ctx.exception.code, "exchange_failed")
        self.assertEqual(backend.calls, [])


if __name__ == "__main__":
    unittest.main()
