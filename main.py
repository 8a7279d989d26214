"""
main.py - cloudcore 진입점

    python main.py endpoint cloudServersOpenStack -g dfw -u demo -k $API_KEY -r DFW

설치 후에는 콘솔 스크립트 `cloudcore`가 main()을 호출합니다.
"""

from cli.app import cli


def main() -> None:
    """cloudcore CLI 실행 (cli.app:cli 위임)"""
    cli(prog_name="cloudcore")


if __name__ == "__main__":
    main()
