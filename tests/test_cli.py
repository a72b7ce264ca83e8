from marketplace.models import Role, User


def test_init_db(app):
    result = app.test_cli_runner().invoke(args=['init-db'])
    assert result.exit_code == 0
    assert 'Database initialized' in result.output


def test_create_admin(app):
    result = app.test_cli_runner().invoke(args=['create-admin', 'Root', 'root@example.com', 'secret'])
    assert result.exit_code == 0
    admin = User.query.filter_by(email='root@example.com').one()
    assert admin.role == Role.ADMIN


def test_create_admin_duplicate_email(app, buyer):
    result = app.test_cli_runner().invoke(args=['create-admin', 'Root', buyer.email, 'secret'])
    assert result.exit_code != 0
    assert 'Email already registered' in result.output


def test_created_admin_can_log_in(app, client):
    app.test_cli_runner().invoke(args=['create-admin', 'Root', 'root@example.com', 'secret'])
    response = client.post('/auth/admin/login', json={'email': 'root@example.com', 'password': 'secret'})
    assert response.status_code == 200
    assert response.get_json()['user']['role'] == 'admin'


def test_create_admin_rejects_malformed_email(app):
    result = app.test_cli_runner().invoke(args=['create-admin', 'Root', 'not-an-email', 'secret'])
    assert result.exit_code != 0
    assert 'Invalid email format' in result.output
    assert User.query.count() == 0
