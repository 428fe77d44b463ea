"""
Tests for Members Only Web Handlers

Drives the Flask app end to end through its test client.
"""

from membersonly.config import Config, CryptoConfig, FeaturesConfig
from membersonly.core.board import MembersOnly
from membersonly.db.users import UserRepository
from membersonly.db.messages import MessageRepository
from membersonly.utils.formatting import format_timestamp
from membersonly.web import create_app
from membersonly.web.session import SESSION_USER_KEY

MEMBER_SECRET = "open-sesame"


def make_board(**features) -> MembersOnly:
    """Board on an in-memory database with cheap hashing."""
    config = Config()
    config.board.member_secret = MEMBER_SECRET
    config.web.secret_key = "test-session-key"
    config.database.path = ":memory:"
    config.crypto = CryptoConfig(argon2_time_cost=1, argon2_memory_kb=8192, argon2_parallelism=1)
    config.features = FeaturesConfig(**features)

    board = MembersOnly(config)
    board.setup()
    return board


class WebTestCase:
    """Shared fixtures: a board, its app and a test client."""

    features: dict = {}

    def setup_method(self):
        """Set up test fixtures."""
        self.board = make_board(**self.features)
        self.app = create_app(self.board)
        self.app.config["TESTING"] = True
        self.client = self.app.test_client()
        self.user_repo = UserRepository(self.board.db)
        self.msg_repo = MessageRepository(self.board.db)

    def teardown_method(self):
        self.board.shutdown()

    def signup(self, **overrides):
        form = {
            "firstname": "John",
            "lastname": "Smith",
            "username": "newuser",
            "password": "secret1",
            "confirmpassword": "secret1",
        }
        form.update(overrides)
        return self.client.post("/signup", data=form)

    def login(self, username="newuser", password="secret1"):
        return self.client.post("/login", data={"username": username, "password": password})

    def signup_and_login(self, **overrides):
        self.signup(**overrides)
        return self.login(overrides.get("username", "newuser"))


class TestPages(WebTestCase):
    """Tests for plain GET pages."""

    def test_index_empty(self):
        """Test the home page renders with no messages."""
        response = self.client.get("/")

        assert response.status_code == 200
        assert b"Members Only" in response.data
        assert b"No messages yet." in response.data

    def test_forms_render(self):
        """Test each form page renders."""
        for path, title in [
            ("/signup", b"Sign Up"),
            ("/login", b"Login"),
            ("/message/create", b"Create Message"),
        ]:
            response = self.client.get(path)
            assert response.status_code == 200
            assert title in response.data

    def test_unmounted_routes(self):
        """Test membership and delete handlers are off by default."""
        assert self.client.get("/membership").status_code == 404
        assert self.client.get("/message/1/delete").status_code == 404

    def test_method_not_allowed_keeps_allow_header(self):
        """Test a 405 error page still lists the allowed methods."""
        response = self.client.post("/logout")

        assert response.status_code == 405
        assert "GET" in response.headers["Allow"]
        assert response.content_type.startswith("text/html")
        assert b'<p class="status">405</p>' in response.data


class TestSignup(WebTestCase):
    """Tests for the signup handler."""

    def test_successful_signup_redirects_to_login(self):
        """Test a valid signup creates the user and redirects to login."""
        response = self.signup()

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/login")

        user = self.user_repo.get_user_by_username("newuser")
        assert user is not None
        assert user.membership_status is False

    def test_invalid_first_name_rerenders(self):
        """Test a bad first name re-renders the form with the error."""
        response = self.signup(firstname="Jo1n")

        assert response.status_code == 200
        assert b"Invalid first name" in response.data
        # Input preserved
        assert b'value="Jo1n"' in response.data
        assert self.board.db.count_users() == 0

    def test_confirmation_mismatch(self):
        """Test mismatched passwords are reported."""
        response = self.signup(confirmpassword="secret2")

        assert response.status_code == 200
        assert b"Password confirmation does not match password" in response.data
        assert self.board.db.count_users() == 0

    def test_duplicate_username(self):
        """Test a taken username is reported on the username field."""
        self.signup()

        response = self.signup(firstname="Jane")

        assert response.status_code == 200
        assert b"Username already in use." in response.data
        assert b'data-field="username"' in response.data
        assert self.board.db.count_users() == 1


class TestLogin(WebTestCase):
    """Tests for login and logout."""

    def setup_method(self):
        super().setup_method()
        self.signup()

    def test_login_success(self):
        """Test correct credentials start a session and go home."""
        response = self.login()

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/")
        with self.client.session_transaction() as sess:
            assert sess[SESSION_USER_KEY] == self.user_repo.get_user_by_username("newuser").id

        page = self.client.get("/")
        assert b"Signed in as newuser" in page.data

    def test_login_wrong_password(self):
        """Test a wrong password goes back to the login form without a session."""
        response = self.login(password="wrong-pass")

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/login")
        with self.client.session_transaction() as sess:
            assert SESSION_USER_KEY not in sess

    def test_logout(self):
        """Test logout clears the session and goes home."""
        self.login()

        response = self.client.get("/logout")

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/")
        with self.client.session_transaction() as sess:
            assert SESSION_USER_KEY not in sess

    def test_logout_when_anonymous(self):
        """Test logout works without a session."""
        assert self.client.get("/logout").status_code == 302

    def test_stale_session_is_anonymous(self):
        """Test a session pointing at a missing user is treated as logged out."""
        with self.client.session_transaction() as sess:
            sess[SESSION_USER_KEY] = 999

        response = self.client.get("/")

        assert response.status_code == 200
        assert b"Signed in as" not in response.data


class TestMessageCreate(WebTestCase):
    """Tests for the message creation handler."""

    def test_anonymous_post_is_stopped(self):
        """Test an unauthenticated submission redirects and creates nothing."""
        response = self.client.post("/message/create", data={"title": "Hi", "message": "There"})

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/login")
        assert self.board.db.count_messages() == 0

    def test_create_message(self):
        """Test a logged-in user can post."""
        self.signup_and_login()

        response = self.client.post("/message/create", data={"title": "Hello", "message": "World"})

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/")
        messages = self.msg_repo.get_all_messages()
        assert [m.title for m in messages] == ["Hello"]

    def test_empty_fields_rerender(self):
        """Test empty title and text re-render with both errors."""
        self.signup_and_login()

        response = self.client.post("/message/create", data={"title": "", "message": ""})

        assert response.status_code == 200
        assert b"Invalid title" in response.data
        assert b"Invalid message" in response.data
        assert self.board.db.count_messages() == 0

    def test_markup_is_escaped_on_listing(self):
        """Test submitted HTML is shown as text, not markup."""
        self.signup_and_login()
        self.client.post("/message/create", data={"title": "<b>Bold</b>", "message": "x"})

        page = self.client.get("/")

        assert b"&lt;b&gt;Bold&lt;/b&gt;" in page.data
        assert b"<b>Bold</b>" not in page.data


class TestAuthorVisibility(WebTestCase):
    """Tests for what members and non-members see on the listing."""

    features = {"membership_enabled": True}

    def setup_method(self):
        super().setup_method()
        self.signup_and_login()
        self.client.post("/message/create", data={"title": "Hello", "message": "World"})

    def test_non_member_sees_anonymous(self):
        """Test authors are hidden from non-members."""
        page = self.client.get("/")

        assert b"Anonymous" in page.data
        assert b"John Smith (newuser)" not in page.data

    def test_member_sees_author(self):
        """Test members see who posted."""
        self.client.post("/membership", data={"password": MEMBER_SECRET})

        page = self.client.get("/")

        assert b"John Smith (newuser)" in page.data

    def test_member_sees_post_date(self):
        """Test members see when each message was posted."""
        self.client.post("/membership", data={"password": MEMBER_SECRET})
        posted = format_timestamp(self.msg_repo.get_all_messages()[0].created_at_us)

        page = self.client.get("/")

        assert f"<time>{posted}</time>".encode() in page.data

    def test_non_member_sees_no_date(self):
        """Test the post date is hidden from non-members."""
        page = self.client.get("/")

        assert b"<time>" not in page.data


class TestMembership(WebTestCase):
    """Tests for the membership handler."""

    features = {"membership_enabled": True}

    def test_form_renders(self):
        """Test the membership form renders."""
        response = self.client.get("/membership")

        assert response.status_code == 200
        assert b"Membership form" in response.data

    def test_wrong_secret(self):
        """Test a wrong secret re-renders with the generic error."""
        self.signup_and_login()

        response = self.client.post("/membership", data={"password": "guess"})

        assert response.status_code == 200
        assert b"Sorry, password is incorrect." in response.data
        assert self.user_repo.get_user_by_username("newuser").membership_status is False

    def test_correct_secret(self):
        """Test the shared secret unlocks membership and goes home."""
        self.signup_and_login()

        response = self.client.post("/membership", data={"password": MEMBER_SECRET})

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/")
        assert self.user_repo.get_user_by_username("newuser").membership_status is True

    def test_correct_secret_without_session(self):
        """Test unlocking without a logged-in user is not-found."""
        response = self.client.post("/membership", data={"password": MEMBER_SECRET})

        assert response.status_code == 404
        assert b"User not found" in response.data


class TestMessageDelete(WebTestCase):
    """Tests for the message deletion handler."""

    features = {"delete_enabled": True}

    def setup_method(self):
        super().setup_method()
        self.signup_and_login()
        self.client.post("/message/create", data={"title": "Hello", "message": "World"})
        self.message = self.msg_repo.get_all_messages()[0]

    def test_anonymous_is_sent_to_login(self):
        """Test both GET and POST require a session."""
        self.client.get("/logout")

        for response in [
            self.client.get(f"/message/{self.message.id}/delete"),
            self.client.post(f"/message/{self.message.id}/delete", data={"message": str(self.message.id)}),
        ]:
            assert response.status_code == 302
            assert response.headers["Location"].endswith("/login")

        assert self.board.db.count_messages() == 1

    def test_confirmation_page(self):
        """Test GET shows the message to be deleted."""
        response = self.client.get(f"/message/{self.message.id}/delete")

        assert response.status_code == 200
        assert b"Delete message" in response.data
        assert b"Hello" in response.data
        assert f'name="message" value="{self.message.id}"'.encode() in response.data

    def test_confirmation_missing_message(self):
        """Test GET for an unknown message is not-found."""
        response = self.client.get("/message/999/delete")

        assert response.status_code == 404
        assert b"Message not found" in response.data

    def test_delete(self):
        """Test POST removes the message and goes home."""
        response = self.client.post(
            f"/message/{self.message.id}/delete",
            data={"message": str(self.message.id)}
        )

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/")
        assert self.board.db.count_messages() == 0

    def test_any_user_may_delete(self):
        """Test deletion has no ownership check."""
        self.client.get("/logout")
        self.signup_and_login(username="other")

        response = self.client.post(
            f"/message/{self.message.id}/delete",
            data={"message": str(self.message.id)}
        )

        assert response.status_code == 302
        assert self.board.db.count_messages() == 0

    def test_delete_missing_message(self):
        """Test POST for an unknown message is not-found."""
        response = self.client.post("/message/999/delete", data={"message": "999"})

        assert response.status_code == 404
        assert self.board.db.count_messages() == 1

    def test_out_of_range_id_is_not_found(self):
        """Test an ID too large for the database is not-found on GET and POST."""
        too_big = "99999999999999999999"

        response = self.client.get(f"/message/{too_big}/delete")
        assert response.status_code == 404
        assert b"Message not found" in response.data

        response = self.client.post(f"/message/{self.message.id}/delete", data={"message": too_big})
        assert response.status_code == 404
        assert b"Message not found" in response.data
        assert self.board.db.count_messages() == 1
