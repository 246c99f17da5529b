import re

from flask import Blueprint, render_template, request, redirect, url_for, flash
from flask_login import login_user, logout_user, login_required, current_user
from sqlalchemy import func, or_

from ..models import db
from ..models.user import User

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_registration(form):
    """Devuelve {campo: mensaje} con los errores del formulario de registro."""
    errores = {}

    username = form.get("username", "").strip()
    email = form.get("email", "").strip()
    password = form.get("password", "")
    confirm = form.get("confirm_password", "")

    if not username:
        errores["username"] = "El usuario es obligatorio."
    elif len(username) < 3:
        errores["username"] = "El usuario debe tener al menos 3 caracteres."

    if not email:
        errores["email"] = "El correo es obligatorio."
    elif not EMAIL_RE.match(email):
        errores["email"] = "Ingrese un correo válido."

    if not password:
        errores["password"] = "La contraseña es obligatoria."
    elif len(password) < 6:
        errores["password"] = "La contraseña debe tener al menos 6 caracteres."

    if not confirm:
        errores["confirm_password"] = "Confirme su contraseña."
    elif password != confirm:
        errores["confirm_password"] = "Las contraseñas no coinciden."

    return errores


# =====================================================================
#   LOGIN
# =====================================================================
@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    if current_user.is_authenticated:
        return redirect(url_for("materials.list_materials"))

    if request.method == "POST":
        username = request.form.get("username", "").strip()
        password = request.form.get("password", "")

        if not username or not password:
            flash("Ingrese usuario y contraseña.", "warning")
            return redirect(url_for("auth.login"))

        user = User.query.filter(
            or_(func.lower(User.username) == username.lower(), func.lower(User.email) == username.lower())
        ).first()

        if not user or not user.check_password(password):
            flash("Credenciales inválidas. Intente nuevamente.", "danger")
            return redirect(url_for("auth.login"))

        if not user.is_active:
            flash("Usuario inactivo.", "danger")
            return redirect(url_for("auth.login"))

        login_user(user)
        flash(f"Bienvenido, {user.username}.", "success")
        return redirect(url_for("materials.list_materials"))

    return render_template("auth/login.html")


# =====================================================================
#   REGISTRO
# =====================================================================
@auth_bp.route("/register", methods=["GET", "POST"])
def register():
    if request.method == "POST":
        errores = validate_registration(request.form)

        username = request.form.get("username", "").strip()
        email = request.form.get("email", "").strip()

        if not errores:
            existe = User.query.filter(
                or_(func.lower(User.username) == username.lower(), func.lower(User.email) == email.lower())
            ).first()
            if existe:
                errores["username"] = "El usuario o correo ya está registrado."

        if errores:
            for mensaje in errores.values():
                flash(mensaje, "danger")
            return render_template("auth/register.html", errores=errores, form=request.form), 400

        user = User(username=username, email=email, role="operator", status="active")
        user.set_password(request.form["password"])
        db.session.add(user)
        db.session.commit()

        flash("Cuenta creada. Ya puede iniciar sesión.", "success")
        return redirect(url_for("auth.login"))

    return render_template("auth/register.html", errores={}, form={})


@auth_bp.route("/logout")
@login_required
def logout():
    logout_user()
    flash("Sesión cerrada.", "info")
    return redirect(url_for("auth.login"))
