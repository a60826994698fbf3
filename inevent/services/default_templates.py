"""Catalogue des templates email semés au déploiement (voir scripts/seed_email_templates.py).

Répartition : 1 inscription, 4 participants, 4 exposants, 4 speakers.
"""

_BANNER = """{{#if eventBanner}}
      <img src="{{eventBanner}}" alt="{{eventName}}" style="max-width: 200px; margin-bottom: 20px;">
      {{/if}}"""

_DETAILS = """<div style="background: white; padding: 20px; border-radius: 8px; margin: 20px 0; border-left: 4px solid #81B441;">
        <h3 style="color: #333; margin-top: 0;">Détails de l'événement</h3>
        <p style="margin: 5px 0;"><strong>Date :</strong> {{eventDate}}</p>
        <p style="margin: 5px 0;"><strong>Heure :</strong> {{eventTime}}</p>
        <p style="margin: 5px 0;"><strong>Lieu :</strong> {{eventLocation}}</p>
      </div>"""

_FOOTER = """<hr style="border: none; border-top: 1px solid #eee; margin: 30px 0;">
      <p style="color: #999; font-size: 14px; text-align: center;">
        Cet email a été envoyé par {{organizerName}}<br>
        Pour toute question : {{supportEmail}}
      </p>"""


def _button(label: str, href: str = "{{eventUrl}}") -> str:
    return (
        '<div style="text-align: center; margin: 30px 0;">'
        f'<a href="{href}" style="background: #81B441; color: white; padding: 15px 30px; '
        'text-decoration: none; border-radius: 5px; font-weight: bold; display: inline-block;">'
        f"{label}</a></div>"
    )


def _layout(title: str, greeting: str, body: str, banner: bool = True) -> str:
    return f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <div style="background: linear-gradient(135deg, #81B441 0%, #6a9635 100%); padding: 30px; text-align: center;">
      {_BANNER if banner else ""}
      <h1 style="color: white; margin: 0; font-size: 28px;">{title}</h1>
  </div>
  <div style="padding: 30px; background: #f8f9fa;">
      <h2 style="color: #333; margin-bottom: 20px;">Bonjour {greeting},</h2>
      {body}
      {_FOOTER}
  </div>
</div>
"""


def _p(text: str) -> str:
    return f'<p style="color: #666; line-height: 1.6; font-size: 16px;">{text}</p>'


DEFAULT_TEMPLATES: list[dict] = [
    # INSCRIPTION
    {
        "name": "Confirmation d'inscription",
        "description": "Email de confirmation envoyé automatiquement après inscription",
        "subject": "Inscription confirmée - {{eventName}}",
        "category": "CONFIRMATION_INSCRIPTION",
        "type": "INVITATION",
        "html_content": _layout(
            "Inscription confirmée !",
            "{{participantName}}",
            _p("Votre inscription à <strong>{{eventName}}</strong> a été confirmée avec succès !")
            + _DETAILS
            + _button("Voir les détails de l'événement")
            + _p("Vous recevrez prochainement d'autres informations importantes concernant l'événement."),
        ),
        "text_content": (
            "Inscription confirmée - {{eventName}}\n\n"
            "Bonjour {{participantName}},\n\n"
            "Votre inscription à {{eventName}} a été confirmée avec succès !\n\n"
            "Détails de l'événement :\n"
            "- Date : {{eventDate}}\n"
            "- Heure : {{eventTime}}\n"
            "- Lieu : {{eventLocation}}\n\n"
            "Pour toute question : {{supportEmail}}\n"
        ),
    },
    # PARTICIPANTS
    {
        "name": "Bienvenue participant",
        "description": "Message de bienvenue pour les participants",
        "subject": "Bienvenue à {{eventName}} !",
        "category": "BIENVENUE_PARTICIPANT",
        "type": "ANNOUNCEMENT",
        "html_content": _layout(
            "Bienvenue !",
            "{{participantName}}",
            _p("Nous sommes ravis de vous accueillir à <strong>{{eventName}}</strong> !")
            + "<ul style=\"color: #666; line-height: 1.8;\"><li>Des conférences inspirantes</li>"
            "<li>Des opportunités de networking</li><li>Des ateliers pratiques</li>"
            "<li>Des rencontres avec des experts</li></ul>"
            + _button("Découvrir le programme"),
        ),
    },
    {
        "name": "Rappel événement J-7",
        "description": "Rappel envoyé 7 jours avant l'événement",
        "subject": "Plus que 7 jours avant {{eventName}} !",
        "category": "RAPPEL_EVENEMENT",
        "type": "REMINDER",
        "html_content": _layout(
            "Plus que 7 jours !",
            "{{participantName}}",
            _p("<strong>{{eventName}}</strong> approche à grands pas !")
            + _DETAILS
            + _p("Pensez à votre badge d'accès (imprimé ou sur mobile) et à une pièce d'identité."),
            banner=False,
        ),
    },
    {
        "name": "Informations pratiques",
        "description": "Informations pratiques pour les participants",
        "subject": "Informations pratiques - {{eventName}}",
        "category": "INFOS_PRATIQUES",
        "type": "ANNOUNCEMENT",
        "html_content": _layout(
            "Informations pratiques",
            "{{participantName}}",
            _p("Voici les informations utiles pour profiter pleinement de <strong>{{eventName}}</strong>.")
            + _DETAILS
            + _p("Accès, parking et restauration sont détaillés sur la page de l'événement.")
            + _button("Consulter la page de l'événement"),
            banner=False,
        ),
    },
    {
        "name": "Suivi post-événement",
        "description": "Remerciement et suivi après l'événement",
        "subject": "Merci pour votre participation à {{eventName}}",
        "category": "SUIVI_POST_EVENEMENT",
        "type": "FOLLOW_UP",
        "html_content": _layout(
            "Merci !",
            "{{participantName}}",
            _p("Merci d'avoir participé à <strong>{{eventName}}</strong>. Votre avis nous intéresse !")
            + _button("Donner mon avis", "{{surveyUrl}}"),
            banner=False,
        ),
    },
    # EXPOSANTS
    {
        "name": "Guide exposant",
        "description": "Guide complet pour les exposants",
        "subject": "Guide exposant - {{eventName}}",
        "category": "GUIDE_EXPOSANT",
        "type": "ANNOUNCEMENT",
        "html_content": _layout(
            "Guide exposant",
            "{{exhibitorName}}",
            _p("Vous exposez à <strong>{{eventName}}</strong> : votre stand porte le numéro <strong>{{standNumber}}</strong>.")
            + _DETAILS
            + _button("Télécharger le guide exposant", "{{guideUrl}}"),
            banner=False,
        ),
    },
    {
        "name": "Rappel installation",
        "description": "Rappel des horaires d'installation du stand",
        "subject": "Rappel installation - {{eventName}}",
        "category": "RAPPEL_INSTALLATION",
        "type": "REMINDER",
        "html_content": _layout(
            "Installation de votre stand",
            "{{exhibitorName}}",
            _p("L'installation du stand <strong>{{standNumber}}</strong> aura lieu le {{setupDate}} à partir de {{setupTime}}.")
            + _p("Lieu : {{eventLocation}}"),
            banner=False,
        ),
    },
    {
        "name": "Informations techniques stand",
        "description": "Informations techniques pour l'équipement du stand",
        "subject": "Infos techniques - {{eventName}}",
        "category": "INFOS_TECHNIQUES_STAND",
        "type": "ANNOUNCEMENT",
        "html_content": _layout(
            "Informations techniques",
            "{{exhibitorName}}",
            _p("Votre stand <strong>{{standNumber}}</strong> dispose de : {{standEquipment}}.")
            + _p("Contact technique : {{technicalContact}}"),
            banner=False,
        ),
    },
    {
        "name": "Bilan participation",
        "description": "Bilan de la participation de l'exposant",
        "subject": "Bilan de votre participation - {{eventName}}",
        "category": "BILAN_PARTICIPATION",
        "type": "FOLLOW_UP",
        "html_content": _layout(
            "Bilan de votre participation",
            "{{exhibitorName}}",
            _p("Merci pour votre présence à <strong>{{eventName}}</strong>.")
            + _p("Visiteurs sur votre stand : {{visitorsCount}}<br>Contacts collectés : {{leadsCount}}"),
            banner=False,
        ),
    },
    # SPEAKERS
    {
        "name": "Confirmation speaker",
        "description": "Confirmation de participation en tant que speaker",
        "subject": "Confirmation speaker - {{eventName}}",
        "category": "CONFIRMATION_SPEAKER",
        "type": "INVITATION",
        "html_content": _layout(
            "Vous êtes speaker !",
            "{{speakerName}}",
            _p("Nous confirmons votre intervention \"<strong>{{presentationTitle}}</strong>\" à <strong>{{eventName}}</strong>.")
            + _p("Date : {{presentationDate}} - Heure : {{presentationTime}} - Salle : {{room}}"),
        ),
    },
    {
        "name": "Informations techniques présentation",
        "description": "Informations techniques pour la présentation",
        "subject": "Infos techniques - {{eventName}}",
        "category": "INFOS_TECHNIQUES_PRESENTATION",
        "type": "ANNOUNCEMENT",
        "html_content": _layout(
            "Préparez votre présentation",
            "{{speakerName}}",
            _p("Matériel disponible en salle {{room}} : vidéoprojecteur, micro, clicker.")
            + _p("Merci d'envoyer votre support \"{{presentationTitle}}\" avant le {{submissionDeadline}}."),
            banner=False,
        ),
    },
    {
        "name": "Rappel présentation",
        "description": "Rappel avant la présentation",
        "subject": "Rappel présentation - {{eventName}}",
        "category": "RAPPEL_PRESENTATION",
        "type": "REMINDER",
        "html_content": _layout(
            "Votre présentation approche",
            "{{speakerName}}",
            _p("Rappel : \"<strong>{{presentationTitle}}</strong>\" le {{presentationDate}} à {{presentationTime}}, salle {{room}}.")
            + _p("Merci de vous présenter 30 minutes avant le début."),
            banner=False,
        ),
    },
    {
        "name": "Remerciement speaker",
        "description": "Remerciement après la présentation",
        "subject": "Merci pour votre présentation - {{eventName}}",
        "category": "REMERCIEMENT_SPEAKER",
        "type": "FOLLOW_UP",
        "html_content": _layout(
            "Merci !",
            "{{speakerName}}",
            _p("Un grand merci pour votre présentation \"<strong>{{presentationTitle}}</strong>\" lors de <strong>{{eventName}}</strong> !")
            + _p("Participants présents : {{attendeesCount}}<br>Note moyenne : {{averageRating}}/5<br>Questions posées : {{questionsCount}}")
            + _button("Voir votre présentation", "{{presentationUrl}}"),
            banner=False,
        ),
    },
]
