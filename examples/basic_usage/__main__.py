# Copyright 2023 The crowdin-api-python Authors
# Use of this source code is governed by an MIT
# license that can be found in the LICENSE file.

import io
import crowdin
import os

env_api_key = "CROWDIN_API_KEY"
env_project_identifier = "CROWDIN_PROJECT_IDENTIFIER"
env_server_url = "CROWDIN_SERVER_URL"


def main() -> None:
    api_key = os.getenv(env_api_key)
    project_identifier = os.getenv(env_project_identifier)
    server_url = os.getenv(env_server_url)
    if api_key is None or project_identifier is None:
        raise Exception(
            f"Please provide the project API key and identifier via the "
            f"{env_api_key} and {env_project_identifier} environment "
            "variables"
        )

    # Create a Client object, and call project_info() to validate connection
    with crowdin.Client(
        project_identifier, api_key=api_key, server_url=server_url
    ) as client:
        info = client.project_info()
        print(f"Project: {info['details']['name']}")

        # Upload a source file, pre-translate it and download the result
        with io.BytesIO(b'{"greeting": "Hello, world!"}') as source:
            client.add_file(
                {"examples/greeting.json": source},
                type="json",
                branch="example",
            )
        client.pre_translate(
            ["de"],
            ["example/examples/greeting.json"],
            method=crowdin.PreTranslateMethod.MACHINE_TRANSLATION,
            engine=crowdin.MachineTranslationEngine.DEEPL,
        )
        client.export_translations(branch="example")
        archive_path = client.download_translations("de", branch="example")
        print(f"Translations downloaded to {archive_path}")

        status = client.language_status("de")
        for file in status.get("files", []):
            print(f"{file['name']}: {file.get('translated', 0)} translated")

        client.delete_directory("example", branch="example")

    print("Success")


if __name__ == "__main__":
    main()
