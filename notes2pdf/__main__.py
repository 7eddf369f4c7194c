from notes2pdf.cli import main

main()
