import streamlit as st

import auth
import ui
from utils import session_manager


def render_auth_screen():
    ui.page_header("🔐 Connectez-vous", "Accédez à votre tableau de bord de closer.")
    client = session_manager.get_backend_client()

    tab_login, tab_register, tab_reset = st.tabs(["Connexion", "Inscription", "Mot de passe oublié"])

    with tab_login:
        with st.form("login_form", clear_on_submit=False):
            email = st.text_input("Adresse email")
            password = st.text_input("Mot de passe", type="password")
            submitted = st.form_submit_button("Se connecter", use_container_width=True)
            if submitted:
                # A successful sign-in emits SIGNED_IN; the session synchronizer takes it from there.
                try:
                    auth.sign_in(client, email, password)
                except auth.InvalidCredentialsError as e:
                    st.error(str(e))
                except auth.AuthServiceError as e:
                    st.error(f"Erreur de connexion : {e}")

    with tab_register:
        with st.form("register_form", clear_on_submit=True):
            first_name = st.text_input("Prénom")
            last_name = st.text_input("Nom")
            email = st.text_input("Adresse email *")
            password = st.text_input("Mot de passe *", type="password")
            password_confirm = st.text_input("Confirmation du mot de passe *", type="password")
            submitted = st.form_submit_button("S'inscrire", use_container_width=True)
            if submitted:
                if password != password_confirm:
                    st.error("Les mots de passe ne correspondent pas.")
                else:
                    try:
                        session = auth.sign_up(client, email, password, first_name, last_name)
                    except auth.InvalidCredentialsError as e:
                        st.error(str(e))
                    except auth.AuthServiceError as e:
                        st.error(f"Erreur lors de l'inscription : {e}")
                    else:
                        if session is None:
                            st.success("Inscription enregistrée. Vérifiez vos emails pour confirmer votre compte.")

    with tab_reset:
        with st.form("reset_form", clear_on_submit=True):
            email = st.text_input("Adresse email")
            submitted = st.form_submit_button("Envoyer le lien de réinitialisation", use_container_width=True)
            if submitted:
                try:
                    auth.request_password_reset(client, email)
                except auth.InvalidCredentialsError as e:
                    st.error(str(e))
                except auth.AuthServiceError as e:
                    st.error(f"Erreur lors de l'envoi : {e}")
                else:
                    st.success("Si un compte existe pour cette adresse, un email de réinitialisation a été envoyé.")
