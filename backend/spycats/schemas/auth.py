"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from spycats.schemas.common import NonBlankString


class RegisterSchema(Schema):
    """Input payload for account registration."""

    username = NonBlankString(required=True, validate=validate.Length(min=3, max=50))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(
        required=True, load_only=True, validate=validate.Length(min=6, max=128)
    )


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    username = NonBlankString(required=True, validate=validate.Length(max=50))
    password = fields.String(
        required=True, load_only=True, validate=validate.Length(min=1, max=128)
    )


class RefreshSchema(Schema):
    """Input payload carrying the refresh token to rotate."""

    refresh_token = fields.String(required=True, validate=validate.Length(min=1))


class UserSchema(Schema):
    """Public user representation."""

    id = fields.Integer(dump_only=True)
    username = fields.String(dump_only=True)
    email = fields.Email(dump_only=True)
    role = fields.Function(lambda user: user.role.value, dump_only=True)


class TokenPairSchema(Schema):
    """Access/refresh pair returned by login, register and refresh."""

    access_token = fields.String(dump_only=True)
    refresh_token = fields.String(dump_only=True)
    expires_in = fields.Integer(dump_only=True)
    token_type = fields.String(dump_only=True)


class AuthSessionSchema(Schema):
    """User plus freshly issued tokens."""

    user = fields.Nested(UserSchema, dump_only=True)
    tokens = fields.Nested(TokenPairSchema, dump_only=True)
